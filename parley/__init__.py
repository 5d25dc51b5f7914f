"""Style resolution for rich text: font stacks, font settings and ranged styles."""

__version__ = "0.1.0"
__all__ = ["util", "style", "scripts", "resolve", "ranged", "tree"]