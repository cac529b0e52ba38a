# keybench/utils.py
from __future__ import annotations
import logging
import pathlib

LOG = logging.getLogger("keybench")
LOG.setLevel(logging.DEBUG)
ch = logging.StreamHandler()
ch.setLevel(logging.INFO)
formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
ch.setFormatter(formatter)
LOG.addHandler(ch)


def set_verbose(verbose: bool):
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)


def ensure_dir(path: str):
    pathlib.Path(path).mkdir(parents=True, exist_ok=True)


def write_file_bytes(path: str, data: bytes):
    with open(path, "wb") as f:
        f.write(data)


def write_file_text(path: str, text: str):
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
