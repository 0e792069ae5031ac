# Services package init
"""
Portfolio API - Services Layer
===============================

What:  Storage glue sitting between routes (HTTP) and the database.
How:   Services take an AsyncSession plus plain field dicts, run one storage
       operation, and return ORM records or raise application exceptions.

Service Inventory:
    - CollectionService: generic CRUD, one instance per collection
      (resource_service, project_service, message_service)
    - ProfileService: singleton profile read/replace/merge
    - FileService: upload validation, placement and cleanup
"""
