"""Mapping layer for turning CSV columns into asset file records.

This module provides functionality to:
- Suggest which column holds which field from headers and sample values
- Validate a (possibly hand-edited) mapping before it is used
- Apply a mapping to rows to obtain semantic records
- Load and save confirmed mappings as YAML
"""

from .models import (
    FieldMapping,
    MappingConfig,
    MappingValidation,
    SemanticRecord,
    TargetField,
)
from .mapper import ColumnMapper, load_mapping_config, dump_mapping_config

__all__ = [
    # Models
    "FieldMapping",
    "MappingConfig",
    "MappingValidation",
    "SemanticRecord",
    "TargetField",
    # Mapper
    "ColumnMapper",
    "load_mapping_config",
    "dump_mapping_config",
]
