"""Wire-level constants for the pyOCD JSON listing protocol."""

from typing import Literal

ListArgument = Literal["--probes", "--targets"]

FORMAT_MAJOR_VERSION = 1

VERSION_KEY = "version"
VERSION_MAJOR_KEY = "major"
VERSION_MINOR_KEY = "minor"
STATUS_KEY = "status"
ERROR_KEY = "error"
BOARDS_KEY = "boards"
TARGETS_KEY = "targets"

BOARD_INFO_KEY = "info"
BOARD_NAME_KEY = "board_name"
BOARD_VENDOR_NAME_KEY = "vendor_name"
BOARD_PRODUCT_NAME_KEY = "product_name"
BOARD_TARGET_KEY = "target"
BOARD_UNIQUE_ID_KEY = "unique_id"

TARGET_NAME_KEY = "name"
TARGET_VENDOR_KEY = "vendor"
TARGET_PART_NUMBER_KEY = "part_number"
TARGET_PART_FAMILIES_KEY = "part_families"
TARGET_SVD_PATH_KEY = "svd_path"

LIST_ARGUMENTS: tuple[str, ...] = ("--probes", "--targets")
