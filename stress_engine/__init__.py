"""StressEngine: voice stress estimation and multimodal stress fusion"""

__version__ = "0.1.0"
