"""
UCI Protocol Interface

This module implements the Universal Chess Interface (UCI) protocol, which
lets the engine play through chess GUIs or scripted matches.

Protocol Flow:
    GUI → "uci"
    Engine → "id name ChessDuel 0.1.0"
    Engine → "uciok"
    GUI → "isready"
    Engine → "readyok"
    GUI → "position startpos moves e2e4"
    GUI → "go depth 3"
    Engine → "info depth 3 score cp 25 nodes 12345 time 850"
    Engine → "bestmove e7e5"

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

from chess_duel.uci.interface import UCIEngine

__all__ = ['UCIEngine']
