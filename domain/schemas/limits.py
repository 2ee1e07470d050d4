"""
Upper bounds for request values, matching the column types in domain.models.
"""

from decimal import Decimal

# Integer primary and foreign key columns (int4 on PostgreSQL)
MAX_DB_ID = 2**31 - 1

# Numeric(10, 2) money columns
MAX_AMOUNT = Decimal("99999999.99")

# Portions of a single meal on one order line
MAX_QUANTITY = 100
