# Services package init
"""
City Explorer Backend — Services Layer
========================================

What:  Business logic between the routes and the outside world.

Service Inventory:
    - ProviderClient / providers: one outbound call per provider request
    - normalizers: raw provider items → result records
    - LocationStore / SqlLocationStore: the location cache
    - LocationResolver: cache-aside geocoding for GET /location
    - ExplorerService: weather, parks, movies and restaurants
"""
