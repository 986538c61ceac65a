"""
Text interface for the image settings dialog.

Reads one command per line, so it works both interactively (sys.stdin) and
from a prepared list of lines in tests.
"""
from typing import Callable, Iterable, Optional

from image_settings.core.alt_text import ImageSettings
from image_settings.editor.session import ImageSettingsSession, SaveDisabledError

HELP = """Commands:
  width N          type a new width
  height N         type a new height
  apply            commit the typed size (snaps to the ratio when locked)
  lock / unlock    turn the aspect ratio lock on or off
  alt TEXT         set alt text
  decorative on|off
  show             print current settings
  save             save and exit
  quit             exit without saving"""


def describe(session: ImageSettingsSession) -> str:
    value = session.value
    committed = session.engine.committed
    lock = "locked" if session.is_locked else "unlocked"
    lines = [
        f"Size: {value.width}x{value.height} (saved {committed.width}x{committed.height}, {lock})",
        f"Alt text: {session.alt_text.value!r}"
        + (" [decorative]" if session.alt_text.is_decorative else ""),
    ]
    return "\n".join(lines)


def run_text_interface(
    session: ImageSettingsSession,
    lines: Iterable[str],
    write: Callable[[str], None] = print
) -> Optional[ImageSettings]:
    """
    Drive a loaded session from text commands.

    Returns:
        The saved ImageSettings, or None if the input ended or the user quit
        without saving
    """
    write(describe(session))
    for line in lines:
        command, _, arg = line.strip().partition(' ')
        command = command.lower()
        arg = arg.strip()

        if not command:
            continue
        if command in ('width', 'height'):
            session.set_dimension(command, arg)
            value = session.value
            write(f"Typed: {value.width}x{value.height}")
        elif command == 'apply':
            result = session.update_dimensions()
            write(f"Size: {result.width}x{result.height}")
        elif command == 'lock':
            session.lock()
            write("Aspect ratio locked")
        elif command == 'unlock':
            session.unlock()
            write("Aspect ratio unlocked")
        elif command == 'alt':
            session.set_alt_text(arg)
            write(f"Alt text: {arg!r}")
        elif command == 'decorative':
            session.set_decorative(arg.lower() in ('on', 'yes', 'true', '1'))
            write("Decorative: " + ("yes" if session.alt_text.is_decorative else "no"))
        elif command == 'show':
            write(describe(session))
        elif command == 'save':
            try:
                settings = session.save()
            except SaveDisabledError as e:
                write(f"Cannot save: {e}")
                continue
            write(f"Saved {settings.dimensions.width}x{settings.dimensions.height}")
            return settings
        elif command in ('quit', 'exit'):
            return None
        elif command == 'help':
            write(HELP)
        else:
            write(f"Unknown command: {command} (type 'help')")
    return None
