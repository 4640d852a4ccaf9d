"""
Iftar Box Package

Order pricing and checkout hand-off for the Ramadan Iftar Box.
Prices an order configuration through Plan → Tier → Price tables and
carries it between the order wizard and checkout as a query string.
"""

__version__ = "1.0.0"
