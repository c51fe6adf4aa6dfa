"""
Minesweeper game engine.

Provides the board state machine: mine placement, reveal and chord rules,
cell marking, win/loss detection, and the controller that ties them to
player actions, plus the score history and a gymnasium adapter.
"""
from .marking import Marking
from .cell import Cell
from .board import Board, BoardConfig, Difficulty, BEGINNER, INTERMEDIATE, EXPERT
from .factory import BoardFactory
from .reveal import ChordResult, flood_reveal, chord_reveal, preview_chord
from .rules import GameStatus, evaluate
from .clock import GameClock
from .scores import Score, ScoreHistory, SortDirection, SortField
from .settings import GameSettings
from .controller import GameController, GameSnapshot
from .environment import MinesweeperEnv, render_ansi

__all__ = [
    "Marking",
    "Cell",
    "Board",
    "BoardConfig",
    "Difficulty",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "BoardFactory",
    "ChordResult",
    "flood_reveal",
    "chord_reveal",
    "preview_chord",
    "GameStatus",
    "evaluate",
    "GameClock",
    "Score",
    "ScoreHistory",
    "SortDirection",
    "SortField",
    "GameSettings",
    "GameController",
    "GameSnapshot",
    "MinesweeperEnv",
    "render_ansi",
]
