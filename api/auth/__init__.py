"""
Identity: accounts, access tokens and the auth gate for write routes.
"""
