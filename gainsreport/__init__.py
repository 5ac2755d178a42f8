"""
Quarterly capital gains report from a brokerage realized gain/loss export.
"""
