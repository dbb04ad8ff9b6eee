"""Fixed-weight multimodal stress fusion"""

from stress_engine.fusion.fusion_engine import FusionEngine, fuse_scores

__all__ = ['FusionEngine', 'fuse_scores']
