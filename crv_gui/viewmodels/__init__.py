"""ViewModels exposing Qt signals for views."""

from crv_gui.viewmodels.registry_vm import RegistryViewModel

__all__ = ["RegistryViewModel"]
