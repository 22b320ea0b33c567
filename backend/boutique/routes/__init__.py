"""
Boutique Backend — API Routes Package
======================================

Route Inventory:
    - auth.py:      POST /api/register, POST /api/login
    - products.py:  GET  /api/products, POST /api/products (admin, multipart)
    - catalog.py:   GET  /products, POST /products, PUT /products/{id} (JSON)
    - health.py:    GET  /health

Routes are thin: they extract request data, call a service, and let the
global exception handlers format failures.
"""
