# utils/console.py

"""Tagged diagnostic output that coexists with an active progress bar."""
import sys

from tqdm import tqdm

def log(tag: str, message: str):
    """Write a '[TAG] message' line to stderr without tearing a tqdm bar."""
    tqdm.write(f"[{tag}] {message}", file=sys.stderr)
