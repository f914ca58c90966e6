"""Entry point for a headless progression simulation."""
from __future__ import annotations

import argparse
import random
from pathlib import Path

from progression.abilities.manager import AbilityManager
from progression.assets.content import ContentManager
from progression.engine.logger import init_logger
from progression.engine.settings import ProgressionSettings
from progression.save.store import JsonProgressionStore
from progression.sim import simulate_run


SETTINGS_PATH = Path("settings.json")
SAVE_PATH = Path("saves/progression.json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate ability progression for one run.")
    parser.add_argument("--character", default="knight")
    parser.add_argument("--levels", type=int, default=30)
    parser.add_argument("--chest-every", type=int, default=5)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--resume", action="store_true", help="continue from the saved run")
    args = parser.parse_args()

    logger = init_logger(SETTINGS_PATH)
    settings = ProgressionSettings.from_settings(SETTINGS_PATH)

    content = ContentManager()
    content.load()

    manager = AbilityManager(
        content.abilities,
        settings,
        store=JsonProgressionStore(SAVE_PATH, logger.channel("save")),
        rng=random.Random(args.seed),
        logger=logger,
    )
    manager.init_run(content.characters.get(args.character), reset=not args.resume)
    summary = simulate_run(manager, args.levels, args.chest_every, logger.channel("offers"))

    print(f"Levels played: {summary.levels}")
    print(f"Chest tiers: {summary.chest_tiers} ({summary.gold} gold)")
    print("Final abilities:")
    for ability_id, level in summary.final_levels.items():
        print(f"  {ability_id}: level {level}")
    if summary.removed:
        print(f"Consumed by evolution: {', '.join(summary.removed)}")


if __name__ == "__main__":
    main()
