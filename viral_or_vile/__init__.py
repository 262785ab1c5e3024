"""VIRAL OR VILE - image virality analysis backed by a local multimodal model."""

__version__ = "0.1.0"
