"""
Crop/soil dataset modules.

Modules:
    schema      - Column layout, parsing defaults, record types
    dataset     - Immutable Dataset with crop/soil/category indices
    loader      - Lenient CSV line parser and file loader
    validation  - Data quality checks over a loaded Dataset
"""
