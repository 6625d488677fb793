"""Database models and utilities."""

from .db_models import Base, FieldMappingModel, MassActionConfigurationModel

__all__ = ["Base", "FieldMappingModel", "MassActionConfigurationModel"]
