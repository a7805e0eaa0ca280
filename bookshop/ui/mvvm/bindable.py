"""
Bindable properties for view-models.

Assigning a new value emits the property's own change signal (when the
class declares one) and the generic ``propertyChanged``.

Usage:
    class ProductDetailViewModel(BindableBase):
        productChanged = Signal(object)
        product = BindableProperty(default=None)

    vm.product = product   # productChanged(product), propertyChanged("product", product)
"""
from typing import Any, Callable, Generic, Optional, TypeVar

from PySide6.QtCore import QObject, Signal

T = TypeVar('T')


def _emit(obj: QObject, signal_name: str, *args) -> None:
    signal = getattr(obj, signal_name, None)
    if signal is not None and callable(getattr(signal, "emit", None)):
        signal.emit(*args)


class BindableProperty(Generic[T]):
    """
    Descriptor that emits a signal when the property value changes.

    Args:
        default: Value returned until the property is first assigned.
        signal_name: Name of the class-level signal to emit. Defaults to
            "{property_name}Changed"; snake_case properties usually pass a
            camelCase name here.
        coerce: Optional callable applied to every assigned value.
    """

    def __init__(
        self,
        default: T = None,
        signal_name: Optional[str] = None,
        coerce: Optional[Callable[[Any], T]] = None
    ):
        self.default = default
        self.signal_name = signal_name
        self.coerce = coerce
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if not self.signal_name:
            self.signal_name = f"{name}Changed"

    @property
    def storage_name(self) -> str:
        return f"_bindable_{self.name}"

    def __get__(self, obj: Optional[QObject], objtype: type = None) -> T:
        if obj is None:
            return self  # type: ignore
        return getattr(obj, self.storage_name, self.default)

    def __set__(self, obj: QObject, value: Any) -> None:
        if self.coerce is not None:
            value = self.coerce(value)
        if getattr(obj, self.storage_name, self.default) == value:
            return

        setattr(obj, self.storage_name, value)
        # PySide6 signals are class attributes; properties without one
        # still report through propertyChanged.
        _emit(obj, self.signal_name, value)
        _emit(obj, "propertyChanged", self.name, value)


class BindableBase(QObject):
    """QObject base with a generic ``propertyChanged(name, value)`` signal."""

    propertyChanged = Signal(str, object)

    def notify_property_changed(self, property_name: str, value: Any) -> None:
        """For computed values that are not BindableProperty descriptors."""
        self.propertyChanged.emit(property_name, value)
