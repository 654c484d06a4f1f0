"""
日志系统

所有模块通过logging.getLogger(__name__)记录日志，日志记录器挂在
'xiangqi_ai_project'之下，由setup_logger统一配置输出。
"""

import logging
import logging.handlers
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

ROOT_LOGGER_NAME = 'xiangqi_ai_project'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _build_handlers(log_file: Optional[str], log_dir: str, max_size: int,
                    backup_count: int, console_output: bool) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=log_path / log_file,
            maxBytes=max_size * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        ))

    return handlers


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: str = 'logs',
    max_size: int = 10,  # MB
    backup_count: int = 5,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志记录器

    同一名称只配置一次，重复调用直接返回已配置的记录器。

    Args:
        name: 日志记录器名称
        level: 日志级别
        log_file: 日志文件名，None表示不写文件
        log_dir: 日志目录
        max_size: 日志文件最大大小(MB)，超过后轮转
        backup_count: 备份文件数量
        console_output: 是否输出到控制台

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(log_file, log_dir, max_size, backup_count, console_output):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def setup_logger_from_config(system_config: Any, debug: bool = False) -> logging.Logger:
    """
    按系统配置设置项目日志

    Args:
        system_config: SystemConfig对象
        debug: 为True时强制DEBUG级别

    Returns:
        logging.Logger: 项目根日志记录器
    """
    return setup_logger(
        level='DEBUG' if debug else system_config.log_level,
        log_file=system_config.log_file,
        log_dir=system_config.log_dir,
        max_size=system_config.log_max_size,
        backup_count=system_config.log_backup_count,
        console_output=system_config.console_output
    )


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """获取日志记录器"""
    return logging.getLogger(name)


class LoggerMixin:
    """
    日志记录器混入类

    self.logger的名称为'xiangqi_ai_project.<类名>'。
    """

    @property
    def logger(self) -> logging.Logger:
        return get_logger(f'{ROOT_LOGGER_NAME}.{self.__class__.__name__}')


class PerformanceLogger:
    """
    性能日志记录器

    记录搜索耗时和节点统计。
    """

    def __init__(self, name: str = 'performance'):
        self.logger = get_logger(f'{ROOT_LOGGER_NAME}.{name}')
        self.start_times: Dict[str, float] = {}

    def start_timer(self, operation: str):
        """开始计时"""
        self.start_times[operation] = time.perf_counter()

    def end_timer(self, operation: str) -> float:
        """
        结束计时

        Returns:
            float: 耗时(秒)，计时器不存在时返回0.0
        """
        if operation not in self.start_times:
            self.logger.warning(f"未找到计时器: {operation}")
            return 0.0

        elapsed = time.perf_counter() - self.start_times.pop(operation)
        self.logger.debug(f"{operation} 耗时: {elapsed:.3f}秒")
        return elapsed

    @contextmanager
    def timed(self, operation: str) -> Iterator[Dict[str, float]]:
        """
        计时上下文，退出后结果字典中的'elapsed'为耗时

        Args:
            operation: 操作名称
        """
        timing = {'elapsed': 0.0}
        self.start_timer(operation)
        try:
            yield timing
        finally:
            timing['elapsed'] = self.end_timer(operation)

    def log_search_stats(self, nodes: int, time_used: float, nodes_per_second: float,
                         depth: Optional[int] = None):
        """记录搜索统计信息"""
        depth_str = f"深度: {depth}, " if depth is not None else ""
        self.logger.info(
            f"搜索统计 - {depth_str}节点数: {nodes}, "
            f"耗时: {time_used:.3f}秒, "
            f"速度: {nodes_per_second:.0f} nodes/sec"
        )


# 全局性能日志记录器实例
performance_logger = PerformanceLogger()
