from .maven import MavenDeployExecutor

__all__ = ["MavenDeployExecutor"]
