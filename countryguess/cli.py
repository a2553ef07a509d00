"""
Country Guess CLI - Command-line interface for the engine.

Usage:
    countryguess play [--players Ann,Bo] [options]   Play in the terminal
    countryguess resolve <text>                      Resolve text to a country
    countryguess countries                           List the gazetteer
    countryguess check                               Self-check the gazetteer
    countryguess serve [--host H] [--port P]         Run the REST API
"""

import argparse
import logging
import sys
import time

from .config import EnvironmentSettings
from .engine_core import Action, Difficulty, GamePhase, GameSettings, GuessOutcome, selectors
from .gazetteer import COUNTRY_ENTRIES, check_gazetteer, resolve
from .session import GameStore, TimerEvent, TurnTimer
from .storage import FileBlobStore, MemoryBlobStore


def main(argv=None):
    """Main CLI entry point."""
    env = EnvironmentSettings.from_env()

    parser = argparse.ArgumentParser(
        description="Country Guess - take turns naming the countries of the world",
        prog="countryguess",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--players", help="Comma-separated player names")
    play_parser.add_argument("--timer", type=int, metavar="SECONDS", choices=range(5, 301),
                             help="Seconds per turn (5-300); no timer when omitted")
    play_parser.add_argument("--strikes", type=int, metavar="N", choices=range(1, 11),
                             help="Strikes before elimination (1-10); no strikes when omitted")
    play_parser.add_argument("--difficulty", choices=[d.value for d in Difficulty],
                             default=Difficulty.MEDIUM.value)
    play_parser.add_argument("--data-dir", default=env.data_dir, help="Where the saved game lives")
    play_parser.add_argument("--no-save", action="store_true", help="Do not save or restore games")

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve text to a country")
    resolve_parser.add_argument("text", nargs="+", help="Country name to resolve")

    subparsers.add_parser("countries", help="List all countries")
    subparsers.add_parser("check", help="Self-check the gazetteer and alias table")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default=env.host)
    serve_parser.add_argument("--port", type=int, default=env.port)
    serve_parser.add_argument("--server-timer", action="store_true",
                              help="Drive the turn timer on the server")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "resolve":
        cmd_resolve(args)
    elif args.command == "countries":
        cmd_countries(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_resolve(args):
    """Resolve text to a country."""
    text = " ".join(args.text)
    resolved = resolve(text)
    if resolved is None:
        print(f"Not a country: {text}")
        sys.exit(1)
    print(f"{resolved.iso_code}  {resolved.display_name}")


def cmd_countries(args):
    """List the gazetteer."""
    for iso, name in COUNTRY_ENTRIES:
        print(f"{iso}  {name}")
    print(f"\n{len(COUNTRY_ENTRIES)} countries")


def cmd_check(args):
    """Self-check the reference data."""
    failures = check_gazetteer()
    if failures:
        print("Gazetteer check failed:")
        for f in failures:
            print(f"  - {f}")
        sys.exit(1)
    print(f"OK: {len(COUNTRY_ENTRIES)} countries, all checks passed")


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    from .api.app import create_app

    app = create_app(run_timer=args.server_timer)
    uvicorn.run(app, host=args.host, port=args.port)


def cmd_play(args):
    """Play a game in the terminal."""
    blob_store = MemoryBlobStore() if args.no_save else FileBlobStore(args.data_dir)
    store = GameStore(blob_store)
    if store.hydrate() and store.state.phase == GamePhase.ACTIVE:
        print("Resuming saved game.")
    else:
        settings = GameSettings(
            timer_enabled=args.timer is not None,
            timer_seconds=args.timer or 60,
            strikes_enabled=args.strikes is not None,
            max_strikes=args.strikes or 3,
            difficulty=Difficulty(args.difficulty),
        )
        store.update_settings(settings)
        names = args.players.split(",") if args.players else _ask_names()
        if not store.dispatch(Action.start_game(settings, names)):
            print("Error: need at least one player with a name")
            sys.exit(1)

    TerminalGame(store).run()


def _ask_names() -> list[str]:
    print("Enter player names, one per line. Empty line to finish.")
    names = []
    while True:
        name = input(f"Player {len(names) + 1}: ").strip()
        if not name:
            return names
        names.append(name)


class TerminalGame:
    """
    Interactive terminal driver.

    Input blocks, so the turn timer is settled after each line: the
    seconds spent typing are replayed as timer steps, and a guess that
    arrives after the countdown ran out is discarded.
    """

    COMMANDS = "Commands: :skip  :quit (keeps the saved game)  :reset"

    def __init__(self, store: GameStore, read=None, write=None, clock=time.monotonic):
        self.store = store
        self.timer = TurnTimer(store)
        self.read = read or input
        self.write = write or print
        self.clock = clock

    def run(self) -> None:
        self.write(self.COMMANDS)
        while True:
            state = self.store.state
            if state.phase == GamePhase.ACTIVE:
                if not self._play_turn():
                    return
            elif state.phase == GamePhase.FINISHED:
                self._show_results()
                if not self._play_again():
                    return
            else:
                return

    def _play_turn(self) -> bool:
        """One prompt for the current player. False when the user quits."""
        state = self.store.state
        player = selectors.current_player(state)
        status = [f"{selectors.guessed_count(state)} found"]
        if state.strikes_enabled:
            status.append(f"strikes {player.strikes}/{state.max_strikes}")
        if state.timer_remaining is not None:
            status.append(f"time {selectors.format_time(state.timer_remaining)}")

        started = self.clock()
        line = self.read(f"[{', '.join(status)}] {player.name}> ").strip()

        if line == ":quit":
            self.write("Game saved.")
            return False
        if line == ":reset":
            self.store.clear()
            self.write("Game discarded.")
            return False

        if self._settle_timer(self.clock() - started):
            self.write(f"Time's up, {player.name}!")
            self._report_elimination(player.id)
            return True

        if line == ":skip":
            self.store.dispatch(Action.advance_turn())
            return True
        if not line:
            return True

        self.store.dispatch(Action.submit_guess(line, int(time.time() * 1000)))
        outcome = self.store.state.last_guess_outcome
        if outcome == GuessOutcome.CORRECT:
            iso = self.store.state.last_guessed_country_iso
            self.write(f"Yes! {self.store.state.guessed_countries[iso].display_name}")
        elif outcome == GuessOutcome.DUPLICATE:
            self.write("Already found.")
        else:
            self.write("Not a country.")
        self._report_elimination(player.id)
        return True

    def _settle_timer(self, elapsed: float) -> bool:
        """Replay elapsed seconds on the timer. True if the turn timed out."""
        if not self.store.state.has_timer:
            return False
        for _ in range(int(elapsed)):
            if self.timer.step() == TimerEvent.TIMEOUT:
                return True
        if self.store.state.timer_remaining == 0:
            return self.timer.step() == TimerEvent.TIMEOUT
        return False

    def _report_elimination(self, player_id: str) -> None:
        player = self.store.state.get_player(player_id)
        if player is not None and player.eliminated:
            self.write(f"{player.name} is out!")

    def _show_results(self) -> None:
        state = self.store.state
        self.write(f"Game over! {selectors.guessed_count(state)} countries found.")
        winner = selectors.winner(state)
        if winner:
            self.write(f"Last one standing: {winner.name}")
        for p, count in selectors.standings(state):
            self.write(f"  {p.name}: {count}")

    def _play_again(self) -> bool:
        answer = self.read("Play again? [y/N] ").strip().lower()
        if answer in ("y", "yes"):
            self.store.dispatch(Action.new_game())
            return True
        self.store.clear()
        return False


if __name__ == "__main__":
    main()
