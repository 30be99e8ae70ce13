"""Program folder bookkeeping and small file helpers."""

from __future__ import annotations

_program_folder = ""


def get_folder_name(filename):
    """The part of ``filename`` up to and including its last slash or backslash.

    An empty string is returned when there is no separator past the first character.
    """
    last_slash = max(filename.rfind("/"), filename.rfind("\\"))
    if last_slash > 0:
        return filename[: last_slash + 1]
    return ""


def save_program_folder(program_path):
    """Remember the folder the program was started from."""
    global _program_folder
    _program_folder = get_folder_name(program_path)


def get_program_folder():
    return _program_folder


def read_file(filename):
    """The whole contents of a file, or empty bytes if it cannot be opened."""
    try:
        with open(filename, "rb") as infile:
            return infile.read()
    except OSError:
        return b""