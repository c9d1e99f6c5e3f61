"""
Service layer abstraction.

Services hold the SQL for each operation and receive the ``Database``
they run against, so the API handlers never touch the driver.
"""
