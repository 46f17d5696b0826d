"""Type aliases used across the bookflow package."""

from typing import Callable, Literal


# Named page sizes accepted by LayoutConfig.with_page_size()
PageSizeName = Literal["a4", "a5", "b5", "letter"]

# Abort hook polled once per placed block
AbortCheck = Callable[[], bool]
