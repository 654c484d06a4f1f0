"""
异常定义

定义象棋引擎的异常类型。正常的对局流程（非法选子、非法走法、光标越界）
不抛异常，只用返回值表示失败；这里的异常只用于配置错误和内部状态损坏。
"""


class XiangqiError(Exception):
    """
    象棋引擎基础异常

    所有象棋引擎相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(XiangqiError):
    """
    配置错误异常

    当配置名称未知或配置参数无效时抛出。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason


class GameStateError(XiangqiError):
    """
    游戏状态异常

    当棋盘状态不一致时抛出，例如搜索结束后棋盘未能完全还原。
    """

    def __init__(self, state_description: str, reason: str = ""):
        message = f"游戏状态错误: {state_description}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_STATE_ERROR")
        self.state_description = state_description
        self.reason = reason
