#!/usr/bin/env python3
"""
Edits the display settings of an image: size (optionally locked to the
image's exact aspect ratio), alt text and the decorative flag.

Provides both a web UI and a text interface. Saved settings are written as
JSON for the editor to pick up.
"""

import os
import sys
import json
import time
import logging
import argparse
import threading
from pathlib import Path
from typing import Optional

from image_settings.core.alt_text import ImageSettings
from image_settings.core.dimensions import Dimension
from image_settings.editor.session import ImageSettingsSession, SaveDisabledError
from image_settings.editor.server import AppState, create_app, find_free_port, run_flask_server
from image_settings.editor.text_ui import run_text_interface
from image_settings.loading import ImageLoadError, PillowImageSource


def write_settings(output_file: Path, settings: ImageSettings) -> None:
    """Save callback: write settings JSON next to the image"""
    output_file.write_text(json.dumps(settings.to_dict(), indent=2) + "\n")


def parse_override(args) -> Optional[Dimension]:
    if args.width is None and args.height is None:
        return None
    if args.width is None or args.height is None:
        raise SystemExit("--width and --height must be given together")
    return Dimension(width=args.width, height=args.height)


def main():
    parser = argparse.ArgumentParser(description='Edit image size and alt text settings')
    parser.add_argument('input', help='Input image file')
    parser.add_argument('output', nargs='?', help='Output settings JSON file')
    parser.add_argument('--width', type=int, help='Saved width to start from')
    parser.add_argument('--height', type=int, help='Saved height to start from')
    parser.add_argument('--alt', default=None, help='Saved alt text')
    parser.add_argument('--decorative', action='store_true', help='Mark the image as decorative')
    parser.add_argument('--text', action='store_true', help='Use the text interface instead of the web UI')
    args = parser.parse_args()

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    input_path = Path(args.input)
    if args.output:
        output_file = Path(args.output)
    else:
        output_file = input_path.with_name(f"{input_path.stem}.image_settings.json")

    session = ImageSettingsSession(
        save_to_editor=lambda settings: write_settings(output_file, settings),
        alt_text=args.alt
    )
    session.set_decorative(args.decorative)

    try:
        natural = session.on_image_load(PillowImageSource(input_path), parse_override(args))
    except ImageLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    step = session.engine.step
    print(f"Image: {input_path}")
    print(f"Natural dimensions: {natural.width}x{natural.height} (ratio step {step.width}x{step.height})")

    # Non-interactive mode (used by tests and automated workflows)
    if os.getenv('AUTO_CONFIRM'):
        try:
            settings = session.save()
        except SaveDisabledError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Saved {settings.dimensions.width}x{settings.dimensions.height} to {output_file}")
        return

    if args.text:
        settings = run_text_interface(session, sys.stdin)
        if settings is None:
            print("Exited without saving")
        else:
            print(f"Settings written to {output_file}")
        return

    state = AppState(session)
    state.update(status="ready", message="Edit the image settings and press Save")
    app = create_app(state)

    host = os.getenv('HOST', '127.0.0.1')
    port = int(os.getenv('PORT') or find_free_port())
    server_thread = threading.Thread(target=run_flask_server, args=(app, host, port), daemon=True)
    server_thread.start()

    print("\n" + "="*70)
    print("Web UI available at: http://{}:{}".format(host, port))
    print("="*70)
    print()

    try:
        while state.get('status') != 'saved':
            time.sleep(0.5)
    except KeyboardInterrupt:
        print("\nExited without saving")
        return

    print(f"Settings written to {output_file}")


if __name__ == '__main__':
    main()
