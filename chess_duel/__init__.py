"""
ChessDuel

A chess rules engine with a minimax opponent, built to sit behind a board
UI, a network relay between two players, or a language-model player.

## Architecture

The package is organized into several key modules:

1. **board**: Game state
   - Position dataclass (board, castling, en passant, clocks, status)
   - Coordinate utilities

2. **rules**: Chess rules
   - Move classification and legality filtering
   - Move application (castling, en passant, promotion)
   - Checkmate / stalemate / draw detection

3. **notation**: Formats
   - FEN export and import
   - Algebraic move log, coordinate (UCI) moves
   - Lossless snapshots

4. **evaluation** and **search**: Computer opponent
   - Material + piece-square table evaluation
   - Minimax with alpha-beta pruning over cloned positions
   - Difficulty levels

5. **uci**: Universal Chess Interface front end

6. **utils**: Perft and tactical test suite

## Quick Start

```python
from chess_duel import Game, select_move

game = Game()
game.apply_uci("e2e4")

move = select_move(game.position, depth=2)
game.apply_move(move)
print(game.to_fen(), game.move_log)
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from chess_duel.board import BLACK, WHITE, GameStatus, Move, MoveKind, Position
from chess_duel.evaluation import ClassicalEvaluator, Evaluator
from chess_duel.game import Game
from chess_duel.search import depth_for_difficulty, find_best_move, select_move

__all__ = [
    'BLACK',
    'WHITE',
    'ClassicalEvaluator',
    'Evaluator',
    'Game',
    'GameStatus',
    'Move',
    'MoveKind',
    'Position',
    'depth_for_difficulty',
    'find_best_move',
    'select_move',
]
