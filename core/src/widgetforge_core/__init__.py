from widgetforge_core.config import ToolkitConfig, load_toolkit_config
from widgetforge_core.head_entries import HtmlHeadEntrySet
from widgetforge_core.message import Message
from widgetforge_core.ui_object import UIObject, UIParent

__version__ = "0.1.0"

__all__ = [
    "HtmlHeadEntrySet",
    "Message",
    "ToolkitConfig",
    "UIObject",
    "UIParent",
    "__version__",
    "load_toolkit_config",
]
