"""
Main entry point for running ChessDuel as a UCI engine.

Usage:
    python -m chess_duel.uci
"""

from chess_duel.uci.interface import UCIEngine

if __name__ == "__main__":
    engine = UCIEngine()
    engine.run()
