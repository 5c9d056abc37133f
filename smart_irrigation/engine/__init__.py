"""
Recommendation engine.

Modules:
    calculator  - Moisture reading -> irrigation recommendation
    service     - DatasetHandle and initialize()/initialize_async()
    session     - Selection state that keeps a recommendation current
"""
