"""winebox - Wine 构建包与前缀管理工具"""

__version__ = "0.3.0"
