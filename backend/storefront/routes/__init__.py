# Routes package init
"""
Storefront Backend — API Routes Package
=========================================

Route Inventory:
    - products.py:  GET  /products            (list products)
                    POST /products            (add product)
                    PUT  /products/{id}       (merge fields into a product)
    - orders.py:    GET  /orders              (list orders)
                    POST /orders              (place order)
    - search.py:    GET  /search?q=           (free-text product search)
    - health.py:    GET  /health              (service health check)
    - static.py:    GET  /, /images/{path}, /{path}  (frontend + images)

Routes stay thin: extract input, call a service, shape the response.
"""
