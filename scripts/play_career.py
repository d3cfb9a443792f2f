"""Play a racing career in the terminal.

Usage:
    uv run python scripts/play_career.py [--seed N] [--save-dir saves/] [--verbose]

Type a menu key and press ENTER.  On the name screen, type the name and
press ENTER again on an empty line to confirm.
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import Any

from paddock.session.app import GameApp
from paddock.session.store import JsonFileSessionStore


_MENUS: dict[str, list[str]] = {
    "menu": ["1) New career", "2) Load game", "3) Tutorial", "4) Help", "q) Quit"],
    "training": [
        "1) Speed training   (-15 energy)",
        "2) Stamina training (-10 energy)",
        "3) Power training   (-15 energy)",
        "4) Rest             (+30 energy)",
        "5) Media day        (+15 energy, may lift form)",
        "s) Save   r) Race schedule   h) Help   q) Main menu",
    ],
    "tutorial_training": [
        "1) Speed  2) Stamina  3) Power  4) Rest  5) Media   q) Quit tutorial",
    ],
    "lineup": ["1) Front runner  2) Mid-pack  3) Late closer  (ENTER = mid-pack)"],
    "tutorial_complete": ["1) Start a real career  2) Main menu"],
    "career_complete": ["ENTER) New career  q) Main menu"],
}


def _print_character(view: dict[str, Any]) -> None:
    c = view["character"]
    s = view["stats"]
    print(f"{c['name']}  |  Turn {c['turn']}  |  Energy {c['energy']}  |  Form {c['form']}")
    print(f"  Speed {s['speed']:3d}   Stamina {s['stamina']:3d}   Power {s['power']:3d}")
    upcoming = view.get("upcoming")
    if upcoming is not None:
        print(f"  Next race: {upcoming.race.name} in {upcoming.turns_until} turn(s)")


def render(app: GameApp) -> None:
    view = app.screen()
    state = view["state"]
    print()
    print("=" * 60)
    print(view["help"].splitlines()[0])
    print("=" * 60)

    if state in ("training", "tutorial_training") and "character" in view:
        _print_character(view)
        for tip in view["recommendations"]:
            print(f"  * {tip}")
    elif state == "pre_race" and view.get("pending_race") is not None:
        race = view["pending_race"]
        print(f"{race.name}: {race.distance}m {race.surface.value.lower()} {race.kind.value.lower()}")
        print(race.description)
    elif state in ("race_running", "results", "tutorial_race") and view.get("outcome"):
        outcome = view["outcome"]
        for i, runner in enumerate(outcome.finishing_order, start=1):
            print(f"  {i}. {runner}")
    elif state == "load":
        saves = view.get("saves") or []
        print("Saves: " + (", ".join(saves) if saves else "(none)"))
        print("Type a save name, or press ENTER for the most recent.")
    elif state == "setup":
        print("Type your character's name, then press ENTER on an empty line.")

    for line in _MENUS.get(state, []):
        print(line)


def _report(result: Any) -> None:
    if not result.success:
        print(f"! {result.error}")
    elif result.message:
        print(result.message)
    races = result.data.get("races")
    if races:
        for race in races:
            print(f"  Turn {race['turn']:2d}: {race['name']} ({race['kind']}, {race['distance']}m)")


def play(seed: int | None, save_dir: str) -> None:
    app = GameApp(store=JsonFileSessionStore(save_dir), seed=seed, render=render)
    render(app)

    while app.running:
        auto = app.machine.auto_progress()
        if auto is not None:
            time.sleep(auto[1] / 1000)
            app.tick()
            continue
        try:
            token = input("> ")
        except EOFError:
            break
        result = app.handle_input(token)
        _report(result)
        if app.state == "setup" and result.data.get("text"):
            print(f"Name: {result.data['text']}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a racing career")
    parser.add_argument("--seed", type=int, default=None, help="Master RNG seed")
    parser.add_argument("--save-dir", type=str, default="saves/", help="Save directory")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    play(args.seed, args.save_dir)


if __name__ == "__main__":
    main()
