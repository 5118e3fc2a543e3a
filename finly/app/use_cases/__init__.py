"""
Use Cases

Organized into domain folders:
- auth/: Signup, login, token refresh, logout
- password/: Password reset
- categories/: Categories and subcategories
- credit_cards/: Credit cards and billing cycles
"""
