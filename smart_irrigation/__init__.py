"""
Smart irrigation reference engine.

Packages:
    data    - Crop/soil dataset schema, loader, indices and validation
    engine  - Recommendation calculator, dataset handle and selection session
    api     - FastAPI service exposing the engine
"""

__version__ = "1.0.0"
