"""Asset bundle inspection and dependency analysis for Yii2 projects."""

from .index import AssetNotFoundError, ProjectAssetIndex
from .inspector import AssetInspector
from .models import AssetDescriptor, Cycle, Cyclic, Ordered, UsageReport, WidgetDescriptor

__all__ = [
    "AssetDescriptor",
    "AssetInspector",
    "AssetNotFoundError",
    "Cycle",
    "Cyclic",
    "Ordered",
    "ProjectAssetIndex",
    "UsageReport",
    "WidgetDescriptor",
]
