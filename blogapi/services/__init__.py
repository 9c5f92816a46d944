"""
Blog API — Services Layer
===========================

Service Inventory:
    - CredentialStore: single-statement queries on blog_users
    - PostStore:       single-statement queries on posts
    - AuthService:     signup/login (hashing, token issuance) over CredentialStore

All are stateless; the AsyncSession for the current request is passed
into every call.
"""
