# Services package init
"""
Inkpost Backend — Services Layer
=================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).

Service Inventory:
    - UserService: Registration and credential checks
    - PostService: Post create/update/list/get with the author rule
    - FileService: Cover upload validation, storage, rename and cleanup
"""
