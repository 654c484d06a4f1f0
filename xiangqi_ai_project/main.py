#!/usr/bin/env python3
"""
Xiangqi AI 主入口文件

提供命令行接口：显示系统信息、运行AI自对弈。
"""

import random
import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from xiangqi_ai_project import __version__, __description__
from xiangqi_ai_project.src.xiangqi_engine import (
    ChessAI, ConfigManager, Game, GameStatus, PieceColor, setup_logger, setup_logger_from_config
)

console = Console()

STATUS_TEXT = {
    GameStatus.ONGOING: ("对局进行中", "yellow"),
    GameStatus.RED_WIN: ("红方胜", "red"),
    GameStatus.BLACK_WIN: ("黑方胜", "white"),
    GameStatus.DRAW: ("和棋", "cyan"),
}


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("♟ Xiangqi AI ♟\n", style="bold blue")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    panel = Panel(
        banner_text,
        title="中国象棋AI",
        title_align="center",
        border_style="blue",
        padding=(1, 2)
    )
    console.print(panel)


@click.group()
@click.version_option(version=__version__, prog_name="Xiangqi AI")
def cli():
    """中国象棋规则引擎与极小极大搜索AI"""


@cli.command()
def info():
    """显示系统信息"""
    print_banner()

    status_text = Text()
    status_text.append("📊 组件\n", style="bold yellow")
    status_text.append("• 规则引擎: ", style="white")
    status_text.append("七种棋子走法、九宫与过河限制\n", style="green")
    status_text.append("• 对局管理: ", style="white")
    status_text.append("行棋方、选子、光标、走法历史\n", style="green")
    status_text.append("• AI: ", style="white")
    status_text.append("极小极大搜索 + alpha-beta剪枝\n", style="green")

    console.print(Panel(status_text, title="系统信息", border_style="yellow"))


@cli.command()
@click.option('--depth', type=click.IntRange(min=1), default=None, help='搜索深度，默认读取AI配置')
@click.option('--seed', type=int, default=None, help='随机种子')
@click.option('--max-moves', type=click.IntRange(min=1), default=40, help='最多走多少步')
@click.option('--config', 'config_dir', type=click.Path(file_okay=False), default=None,
              help='配置目录')
@click.option('--debug', is_flag=True, help='启用调试日志')
def selfplay(depth: Optional[int], seed: Optional[int], max_moves: int,
             config_dir: Optional[str], debug: bool):
    """AI自对弈"""
    config_manager = ConfigManager(config_dir) if config_dir else None
    ai_config = config_manager.get_ai_config() if config_manager else None
    game_config = config_manager.get_game_config() if config_manager else None
    system_config = config_manager.get_system_config() if config_manager else None

    if system_config is not None:
        setup_logger_from_config(system_config, debug=debug)
    else:
        setup_logger(level='DEBUG' if debug else 'WARNING')

    if depth is None:
        depth = ai_config.max_depth if ai_config else 2
    if seed is None and ai_config is not None:
        seed = ai_config.seed
    use_randomization = ai_config.use_randomization if ai_config else True

    game = Game(game_config)
    rng = random.Random(seed)
    players = {
        color: ChessAI(game, ai_color=color, max_depth=depth,
                       use_randomization=use_randomization, rng=rng)
        for color in PieceColor
    }

    console.print(f"[blue]开始自对弈 - 深度: {depth}, 种子: {seed}, 最多 {max_moves} 步[/blue]")

    for ply in range(1, max_moves + 1):
        mover = game.current_player
        move = players[mover].make_move()
        if move is None:
            console.print(f"[yellow]{mover.value} 无子可走[/yellow]")
            break

        piece = game.board.get_piece_at(move.to_pos)
        console.print(
            f"{ply:3d}. {piece.get_display_name():<22} "
            f"{tuple(move.from_pos)} -> {tuple(move.to_pos)}"
        )
        if game.is_over:
            break

    label, style = STATUS_TEXT[game.status]
    console.print(Panel(
        f"结果: {label}\n总步数: {len(game.move_history)}\n剩余棋子: {len(game.board)}",
        title="自对弈结束",
        border_style=style
    ))

    valid, errors = game.board.validate_board_state()
    if not valid:
        for error in errors:
            console.print(f"[red]棋局异常: {error}[/red]")


def main():
    """主入口函数"""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
