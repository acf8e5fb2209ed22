# frame_catalog/models/__init__.py

# This file makes the model classes directly available from the 'models' package.
# Instead of: from frame_catalog.models.catalog_models import SiteDescriptor
# We can now use: from frame_catalog.models import SiteDescriptor

from .catalog_models import (
    Color,
    FieldRule,
    FieldRules,
    FrameType,
    ProductRecord,
    RawItemBundle,
    Shape,
    SiteConfigError,
    SiteDescriptor,
    StaticOverrides,
)
