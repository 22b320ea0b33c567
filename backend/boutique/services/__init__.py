"""
Boutique Backend — Services Layer
==================================

What:  Business logic sitting between routes (HTTP) and the store.
How:   Services are built once by the application factory with their
       collaborators (hasher, token issuer, image store) and reached from
       routes through the getters in boutique.dependencies.

Service Inventory:
    - AuthService:    registration, login, session token minting
    - CatalogService: product listing, creation, full-replace update
    - ImageStore:     uploaded image validation, naming and storage
"""
