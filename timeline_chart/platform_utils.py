"""
Platform Utilities — OS-specific fixes for the interactive chart window.

┌──────────────────┬──────────────────────────┬──────────────────────────┐
│ Issue            │ Windows                  │ Linux                    │
├──────────────────┼──────────────────────────┼──────────────────────────┤
│ Key codes        │ 8-bit clean              │ modifier flag bits set   │
│ HiDPI            │ auto-scale → blurry text │ usually no scaling       │
│                  │ and offset mouse coords  │                          │
└──────────────────┴──────────────────────────┴──────────────────────────┘

Tap hit-testing relies on mouse coordinates matching canvas pixels, so the
DPI fix matters more here than for a view-only plot.
"""

from __future__ import annotations

import ctypes
import platform
import warnings


class PlatformInfo:
    """Immutable platform detection — computed once at import time."""

    OS: str = platform.system()                  # 'Windows' | 'Linux' | 'Darwin'
    IS_WINDOWS: bool = (OS == 'Windows')


# ────────────────────────────────────────────────────────────
# HiDPI Awareness (Windows)
# ────────────────────────────────────────────────────────────
def enable_hidpi_awareness() -> bool:
    """
    [Windows Only] Declare DPI awareness so mouse taps land on canvas pixels.

    Must be called BEFORE cv2.namedWindow(). Returns True if set.
    """
    if not PlatformInfo.IS_WINDOWS:
        return False

    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(2)
        return True
    except (AttributeError, OSError):
        pass

    try:
        ctypes.windll.user32.SetProcessDPIAware()
        return True
    except (AttributeError, OSError) as e:
        warnings.warn(
            f"Cannot declare DPI awareness: {e}. "
            f"Tooltip hit regions may be offset on scaled displays.",
            RuntimeWarning, stacklevel=2
        )
        return False


# ────────────────────────────────────────────────────────────
# Cross-Platform Key Code Normalization
# ────────────────────────────────────────────────────────────
def normalize_key(raw_key: int) -> int:
    """
    Mask cv2.waitKey() results to the low 8 bits.

    GTK/Qt backends on Linux may set modifier bits (NumLock sets 0x100000),
    so 'q' can arrive as 0x100071.
    """
    if raw_key < 0:
        return -1
    return raw_key & 0xFF


def apply_platform_fixes() -> dict:
    """Apply platform-specific fixes once at startup. Returns what was done."""
    return {
        'os': PlatformInfo.OS,
        'hidpi_set': enable_hidpi_awareness(),
    }
