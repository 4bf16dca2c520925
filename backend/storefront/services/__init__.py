# Services package init
"""
Storefront Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database.
How:   Every service is constructed with the connected `Database`.

Service Inventory:
    - ProductStore:   list / insert / partial update / search products
    - OrderLog:       append orders inside a transaction, list orders
    - OrderProcessor: atomic inventory check + debit + order append
"""
