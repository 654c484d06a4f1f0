"""
Xiangqi AI 源代码模块

包含子系统：
- xiangqi_engine: 象棋规则与AI引擎
"""

from . import xiangqi_engine

__all__ = [
    "xiangqi_engine",
]
