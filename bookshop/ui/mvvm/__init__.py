"""
MVVM Package - property change notification for PySide6 view-models.

Provides:
- BindableProperty: Descriptor for auto-signaling properties.
- BindableBase: QObject base with a generic propertyChanged signal.
- BaseViewModel: Base for page view-models, with cancellable async work.
"""
from bookshop.ui.mvvm.bindable import BindableProperty, BindableBase
from bookshop.ui.mvvm.viewmodel import BaseViewModel

__all__ = [
    "BaseViewModel",
    "BindableBase",
    "BindableProperty",
]
