import os
from pathlib import PurePath
from typing import Union


def extension_of(path: Union[str, PurePath]) -> str:
    """
    Returns the text after the last '.' of the final path component.
    Names whose only dot is the first character ('.bashrc') have no
    extension; 'notes.' has an empty one and '..foo' has 'foo'.
    Extensions that are not valid UTF-8 on disk count as no extension.
    """
    name = os.path.basename(os.fspath(path))
    dot = name.rfind(".")
    if dot <= 0:
        return ""
    ext = name[dot + 1:]
    if not is_utf8_text(ext):
        return ""
    return ext


def is_utf8_text(text: str) -> bool:
    # Undecodable filename bytes come back from os.listdir as lone surrogates
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def display_path(path: Union[str, PurePath]) -> str:
    """
    Printable form of a path: bytes that are not valid UTF-8 are shown
    as backslash escapes (b'bad.\\xff' -> 'bad.\\\\xff').
    """
    return os.fsencode(path).decode("utf-8", "backslashreplace")
