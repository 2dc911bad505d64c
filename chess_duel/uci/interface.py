"""
UCI Protocol Implementation

This module implements the Universal Chess Interface (UCI) protocol so the
engine can be driven by chess GUIs and by scripted matches.

UCI Commands Supported:
    - uci: Identify engine
    - isready: Synchronization check
    - ucinewgame: Start new game
    - setoption name Difficulty value <easy|normal|hard|expert>
    - position: Set board position
    - go: Start searching
    - stop: Wait for the running search
    - quit: Shutdown engine

Threading:
    - Main thread: Listen for UCI commands
    - Search thread: Run minimax on a clone of the current position
    - The search has no cancellation; 'stop' waits for it to finish

References:
    - UCI Protocol: https://www.chessprogramming.org/UCI
"""

import logging
import random
import sys
import threading
import time
from pathlib import Path
from typing import Optional

from chess_duel.config import EngineConfig
from chess_duel.evaluation.classical import ClassicalEvaluator
from chess_duel.game import Game
from chess_duel.notation.algebraic import move_to_uci
from chess_duel.search.difficulty import DIFFICULTY_DEPTHS
from chess_duel.search.minimax import find_best_move


def setup_logger(log_dir: Path, debug: bool = False):
    """
    Setup file-based logger for UCI debugging.

    Args:
        log_dir: Directory that receives engine.log
        debug: If True, log at DEBUG level; otherwise INFO level

    Returns:
        Configured logger instance
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "engine.log"

    logger = logging.getLogger("chess_duel")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class UCIEngine:
    """
    UCI-compliant front end for the rules and search engines.

    Attributes:
        game: Current game
        config: Engine configuration (difficulty, depth, seed, logging)
        evaluator: Position evaluation function
        rng: Random source for the root move shuffle
        searching: Flag indicating if search is in progress
        search_thread: Background thread for search
    """

    def __init__(self, config: Optional[EngineConfig] = None, evaluator=None):
        """
        Initialize UCI engine.

        Args:
            config: Engine configuration (default: EngineConfig())
            evaluator: Position evaluator (default: ClassicalEvaluator)
        """
        self.config = config if config else EngineConfig()
        self.game = Game()
        self.evaluator = evaluator if evaluator else ClassicalEvaluator()
        self.rng = random.Random(self.config.random_seed)

        self.searching = False
        self.search_thread: Optional[threading.Thread] = None

        self.name = "ChessDuel"
        self.version = "0.1.0"
        self.author = "ChessDuel contributors"

        self.logger = setup_logger(self.config.log_dir, debug=self.config.debug)
        self.logger.info("=== ChessDuel Engine Started ===")
        self.logger.info(f"Configuration: {self.config}")

    def run(self):
        """
        Main UCI command loop.

        Listens for UCI commands on stdin and responds on stdout.
        Runs until 'quit' command or EOF.
        """
        while True:
            try:
                command = input().strip()

                if not command:
                    continue

                self.logger.debug(f">>> {command}")

                tokens = command.split()
                cmd = tokens[0].lower()

                if cmd == "uci":
                    self.handle_uci()

                elif cmd == "isready":
                    self.handle_isready()

                elif cmd == "ucinewgame":
                    self.handle_ucinewgame()

                elif cmd == "setoption":
                    self.handle_setoption(tokens)

                elif cmd == "position":
                    self.handle_position(tokens)

                elif cmd == "go":
                    self.handle_go(tokens)

                elif cmd == "stop":
                    self.handle_stop()

                elif cmd == "quit":
                    self.handle_quit()
                    break

                else:
                    # Unknown commands are ignored per the UCI protocol
                    self.logger.debug(f"Unknown command ignored: {command}")

            except EOFError:
                self.logger.info("EOF received, shutting down")
                break
            except Exception as e:
                self.logger.error(f"Command error: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

    def _send(self, message: str):
        print(message)
        sys.stdout.flush()
        self.logger.debug(f"<<< {message}")

    def handle_uci(self):
        """
        Handle 'uci' command - identify engine.

        Response:
            id name ChessDuel 0.1.0
            id author ...
            option name Difficulty ...
            uciok
        """
        self.logger.info("Handling: uci")

        self._send(f"id name {self.name} {self.version}")
        self._send(f"id author {self.author}")
        levels = " ".join(f"var {name}" for name in DIFFICULTY_DEPTHS)
        self._send(
            f"option name Difficulty type combo default {self.config.difficulty} {levels}"
        )
        self._send("uciok")

    def handle_isready(self):
        """Handle 'isready' command - synchronization."""
        self.logger.info("Handling: isready")
        self._send("readyok")

    def handle_ucinewgame(self):
        """Handle 'ucinewgame' command - reset for new game."""
        self.logger.info("Handling: ucinewgame - resetting game")
        self.game.reset()

    def handle_setoption(self, tokens):
        """
        Handle 'setoption name Difficulty value <level>'.

        Args:
            tokens: Command tokens
        """
        try:
            name = tokens[tokens.index("name") + 1]
            value = tokens[tokens.index("value") + 1]
        except (ValueError, IndexError):
            self.logger.warning(f"Malformed setoption: {' '.join(tokens)}")
            return

        if name.lower() != "difficulty":
            self.logger.debug(f"Unknown option ignored: {name}")
            return

        if value.lower() not in DIFFICULTY_DEPTHS:
            self.logger.warning(f"Unknown difficulty ignored: {value}")
            return

        self.config.difficulty = value.lower()
        self.config.depth = None
        self.logger.info(f"Difficulty set to {self.config.difficulty} (depth {self.config.search_depth})")

    def handle_position(self, tokens):
        """
        Handle 'position' command - set board position.

        Formats:
            position startpos
            position startpos moves e2e4 e7e5
            position fen <FEN string>
            position fen <FEN string> moves e2e4

        Args:
            tokens: Command tokens (e.g., ['position', 'startpos', 'moves', 'e2e4'])
        """
        self.logger.info(f"Handling: position {' '.join(tokens[1:])}")

        if len(tokens) < 2:
            self.logger.warning("Position command with insufficient arguments")
            return

        if tokens[1] == "startpos":
            self.game = Game()
            move_index = 2
        elif tokens[1] == "fen":
            try:
                moves_index = tokens.index("moves")
                fen = " ".join(tokens[2:moves_index])
                move_index = moves_index
            except ValueError:
                fen = " ".join(tokens[2:])
                move_index = len(tokens)

            try:
                self.game = Game.from_fen(fen)
                self.logger.debug(f"Set position from FEN: {fen}")
            except ValueError as e:
                self.logger.error(f"Invalid FEN: {e}")
                print(f"# Invalid FEN: {e}", file=sys.stderr)
                return
        else:
            self.logger.warning(f"Unknown position type: {tokens[1]}")
            return

        if move_index < len(tokens) and tokens[move_index] == "moves":
            moves_applied = []
            for move_str in tokens[move_index + 1:]:
                if not self.game.apply_uci(move_str):
                    self.logger.error(f"Illegal move: {move_str}")
                    print(f"# Illegal move: {move_str}", file=sys.stderr)
                    break
                moves_applied.append(move_str)

            if moves_applied:
                self.logger.debug(f"Applied moves: {' '.join(moves_applied)}")

        self.logger.info(f"Position updated: {self.game.to_fen()}")

    def handle_go(self, tokens):
        """
        Handle 'go' command - start search.

        Formats:
            go depth 3
            go (uses the configured difficulty)

        Time-control arguments are accepted and ignored; the clock is
        enforced outside the engine. A 'go' received while a search is
        still running is ignored.

        Args:
            tokens: Command tokens (e.g., ['go', 'depth', '3'])
        """
        self.logger.info(f"Handling: go {' '.join(tokens[1:])}")

        if self.searching:
            self.logger.warning("Search already in progress, ignoring go")
            return

        depth = None
        i = 1
        while i < len(tokens):
            if tokens[i] == "depth" and i + 1 < len(tokens):
                depth = int(tokens[i + 1])
                i += 2
            else:
                i += 1

        if depth is None:
            depth = self.config.search_depth
            self.logger.debug(f"No depth specified, using configured depth {depth}")

        self.logger.info(f"Starting search thread with depth={depth}")

        # The search thread owns a clone; the live game stays untouched
        game_copy = self.game.clone()

        self.searching = True
        self.search_thread = threading.Thread(
            target=self._search_thread,
            args=(depth, game_copy)
        )
        self.search_thread.start()

    def _search_thread(self, depth: int, game: Game):
        """
        Background thread for search.

        Output:
            info depth X score cp Y nodes Z time T
            bestmove <move>   (or 'bestmove 0000' when no move exists)
        """
        start_time = time.time()

        try:
            best_move, score, nodes_searched = find_best_move(
                game.position,
                depth,
                self.evaluator,
                self.rng,
            )

            elapsed_ms = int((time.time() - start_time) * 1000)
            self.logger.info(
                f"Search complete: best_move={best_move}, score={score:.2f}, "
                f"nodes={nodes_searched}, time={elapsed_ms}ms"
            )

            if best_move:
                self._send(
                    f"info depth {depth} score cp {int(score)} nodes {nodes_searched} time {elapsed_ms}"
                )
                self._send(f"bestmove {move_to_uci(best_move)}")
            else:
                self.logger.warning("No legal moves in searched position")
                self._send("bestmove 0000")

        except Exception as e:
            elapsed_time = time.time() - start_time
            self.logger.error(f"Search error after {elapsed_time:.3f}s: {e}", exc_info=True)
            print(f"# Search error: {e}", file=sys.stderr)

            # Send a legal move as fallback
            legal_moves = game.legal_moves()
            if legal_moves:
                fallback_move = move_to_uci(legal_moves[0])
                self.logger.warning(f"Using fallback move: {fallback_move}")
                self._send(f"bestmove {fallback_move}")
            else:
                self.logger.error("No legal moves available for fallback!")

        finally:
            self.searching = False
            self.logger.debug("Search thread finished")

    def handle_stop(self):
        """
        Handle 'stop' command.

        The search cannot be interrupted, so this waits for the running
        search to deliver its move.
        """
        self.logger.info("Handling: stop")

        if self.search_thread and self.search_thread.is_alive():
            self.logger.debug("Waiting for search thread to finish")
            self.search_thread.join()

    def handle_quit(self):
        """Handle 'quit' command - shutdown engine."""
        self.logger.info("Handling: quit - shutting down engine")

        if self.search_thread and self.search_thread.is_alive():
            self.logger.debug("Waiting for search thread to complete before quitting")
            self.search_thread.join()

        self.logger.info("=== ChessDuel Engine Stopped ===")
