"""uispec - UI component specification: attribute lint rules and render-time prop defaults."""

__version__ = "0.3.0"
