from .renderer import CompletionItemObserver

__all__ = ["CompletionItemObserver"]
