from .strategies import FatMergeStrategy, IndependentStrategy, PostProcessStrategy, build_strategy

__all__ = ["FatMergeStrategy", "IndependentStrategy", "PostProcessStrategy", "build_strategy"]
