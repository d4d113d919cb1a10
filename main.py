# main.py

import json
import logging
import os
import numpy as np
import pygame
import constants
import logger_setup
from animation_state import AnimationState
from clock_reading import ClockReading
from frame_renderer import FrameRenderer

# Get the application's dedicated logger
logger = logging.getLogger("constellation_clock")

CONFIG_FILENAME = 'config.json'

def resolve_config_path(config_path=None):
    """
    Picks the configuration file: an explicit path as given, otherwise
    config.json in the working directory, otherwise the one beside this module.
    """
    if config_path is not None:
        return config_path
    if os.path.isfile(CONFIG_FILENAME):
        return CONFIG_FILENAME
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), CONFIG_FILENAME)

def load_config(config_path=None):
    """
    Reads the run configuration (run id, master seed, logging settings).

    Data Contract:
    - Inputs: config_path (str or None) - Path to the configuration file.
      None searches the working directory, then the module's directory.
    - Outputs: dict with at least 'run_id', 'master_seed' and 'logging'.
    - Errors: FileNotFoundError / json.JSONDecodeError propagate; a missing
      required key raises KeyError.
    """
    config_path = resolve_config_path(config_path)
    with open(config_path, 'r') as f:
        config = json.load(f)
    for key in ('run_id', 'master_seed', 'logging'):
        if key not in config:
            raise KeyError(f"config file {config_path} is missing '{key}'")
    return config

def run_clock_loop(renderer, screen, clock):
    """
    The frame loop. Runs until the window is closed or Escape is pressed.
    Resizing only replaces the display surface; the layout and schedule stay.
    """
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                logger.info(f"Window resized to {event.w}x{event.h}")

        frame = renderer.render(screen, ClockReading.now())
        pygame.display.flip()
        clock.tick(constants.FPS)

        # --- Diagnostics (throttled) ---
        if frame.frame_count % constants.DIAGNOSTICS_INTERVAL == 0:
            logger.debug(
                f"Frame={frame.frame_count}, "
                f"Time={frame.reading.hour_of_day:02d}:{frame.reading.minute:02d}:{frame.reading.second:02d}, "
                f"Connections={len(frame.segments)}, "
                f"LiveParticles={len(renderer.state.trail)}, "
                f"FPS={clock.get_fps():.1f}"
            )

def main():
    """
    Main function to initialize and run the clock.
    """
    # --- Setup ---
    config = load_config()
    logger_setup.setup_logging(config)

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    # --- Initialization ---
    pygame.init()
    try:
        screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption(constants.TITLE)
        clock = pygame.time.Clock()

        state = AnimationState(rng)
        renderer = FrameRenderer(state)

        run_clock_loop(renderer, screen, clock)
    except Exception:
        logger.exception("Clock stopped on an unexpected error.")
        raise
    finally:
        logger.info("Application shutting down.")
        pygame.quit()

if __name__ == "__main__":
    main()
