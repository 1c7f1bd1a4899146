from widgetforge_core.widgets.button import Button
from widgetforge_core.widgets.container import Container, DisplayableContainer
from widgetforge_core.widgets.entry import Entry, IntegerEntry
from widgetforge_core.widgets.flydown import Flydown, FlydownDivider, FlydownOption
from widgetforge_core.widgets.form import Form, FormControl
from widgetforge_core.widgets.message_display import MessageDisplay
from widgetforge_core.widgets.tree_flydown import GroupedFlydown, TreeFlydown, TreeFlydownNode
from widgetforge_core.widgets.widget import Widget
from widgetforge_core.widgets.wizard import (
    WizardForm,
    WizardNavigation,
    WizardNavigationSteps,
    WizardStep,
)

__all__ = [
    "Button",
    "Container",
    "DisplayableContainer",
    "Entry",
    "Flydown",
    "FlydownDivider",
    "FlydownOption",
    "Form",
    "FormControl",
    "GroupedFlydown",
    "IntegerEntry",
    "MessageDisplay",
    "TreeFlydown",
    "TreeFlydownNode",
    "Widget",
    "WizardForm",
    "WizardNavigation",
    "WizardNavigationSteps",
    "WizardStep",
]
