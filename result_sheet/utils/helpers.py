# result_sheet/utils/helpers.py
import datetime as dt
from pathlib import Path

import cv2


def ensure_dir(path: str) -> str:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return str(p)


def timestamped_dir(root: str, suffix: str) -> str:
    stamp = dt.datetime.now().strftime("%Y-%m-%d_%H-%M-%S_%f")
    return ensure_dir(f"{root}/{stamp}_{suffix}")


def save_debug_image(img, path):
    if img is None:
        return
    if not hasattr(img, "size") or img.size == 0:
        return
    cv2.imwrite(path, img)


def save_debug_text(text: str, path: str):
    with open(path, "w", encoding="utf-8") as f:
        f.write(text or "")
