"""Mass action configuration service.

Discovery of target operations and bulk data sources, plus atomic persistence
of mass action configurations and their field mappings.
"""

__version__ = "0.1.0"
