"""
Application Layer for the Gym Platform API.

This package contains:
- exceptions: Error taxonomy mapped to HTTP statuses at the API boundary
- ports/: Abstract repository interfaces (what the use cases need)
- use_cases/: Services orchestrating accounts, plans, logs and the catalog
"""
