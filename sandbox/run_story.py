# run_story.py
from __future__ import annotations

import argparse
import sys
import pygame

from giftroom.app import build_app
from giftroom.config import StoryConfig
from giftroom.debug.debug_logger import ALL_CATEGORIES
from giftroom.storylines import storyline_ids
from keepsake.input.intents import intent_from_event


def _parse_size(s: str) -> tuple[int, int]:
    try:
        a, b = s.lower().replace("x", " ").split()
        return int(a), int(b)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WxH (e.g. 960x720), got: {s!r}")


def _parse_csv(s: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in s.split(",") if part.strip())


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Gift Room (DEV harness)")
    p.add_argument("--storyline", default="anniversary", choices=storyline_ids(), help="Storyline id")
    p.add_argument("--require", default=None, type=_parse_csv,
                   help="Comma-separated gift ids the finale waits for (default: storyline gate)")
    p.add_argument("--start", default=None, help="Start at this scene id (dev jump)")
    p.add_argument("--window", default="960x720", type=_parse_size, help="Window size WxH")
    p.add_argument("--fps", default=60, type=int, help="Frame cap")
    p.add_argument("--debug", default=None, type=_parse_csv,
                   help=f"Debug categories, comma-separated ({', '.join(sorted(ALL_CATEGORIES))})")
    return p


def config_from_args(args: argparse.Namespace) -> StoryConfig:
    return StoryConfig(
        storyline_id=args.storyline,
        required_gifts=args.require,
        start_scene=args.start,
        window_size=args.window,
        fps=args.fps,
        debug_categories=args.debug,
    )


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_arg_parser().parse_args(argv)

    try:
        cfg = config_from_args(args)
        app = build_app(cfg)
    except (KeyError, ValueError) as e:
        print(f"[DEV] Invalid configuration: {e}")
        return 2

    pygame.init()
    try:
        screen = pygame.display.set_mode(cfg.window_size)
        pygame.display.set_caption(f"Gift Room DEV - {cfg.storyline_id}")

        fonts = {
            "title": pygame.font.SysFont("georgia", 44, bold=True),
            "body": pygame.font.SysFont("georgia", 24),
            "button": pygame.font.SysFont("arial", 20, bold=True),
            "small": pygame.font.SysFont("arial", 16),
        }

        clock = pygame.time.Clock()

        print("[DEV] Controls:")
        print("  ESC          Quit")
        print("  Enter/Space  Activate focused control (or click)")
        print("  Tab/Arrows   Move focus")
        print("  F3           Story snapshot")

        while app.running:
            dt_ms = clock.tick(cfg.fps)

            for event in pygame.event.get():
                if event.type == pygame.KEYDOWN and event.key == pygame.K_F3:
                    app.snapshot()
                    continue
                intent = intent_from_event(event)
                if intent is not None:
                    app.handle_intent(intent)

            app.update(dt_ms)

            # Draw
            screen.fill((0, 0, 0))
            app.draw(screen, fonts)
            pygame.display.flip()

    finally:
        app.shutdown()
        pygame.quit()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
