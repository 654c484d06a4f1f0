"""
中国象棋AI (Xiangqi AI)

中国象棋规则引擎与极小极大搜索AI。
"""

__version__ = "0.1.0"
__author__ = "Xiangqi AI Team"
__description__ = "中国象棋规则引擎与alpha-beta剪枝极小极大搜索AI"

# 导入主要模块
from xiangqi_ai_project.src import xiangqi_engine

__all__ = [
    "xiangqi_engine",
    "__version__",
    "__author__",
    "__description__",
]
