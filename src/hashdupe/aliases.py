from hashdupe.core.hasher import XXHashAlgorithmImpl, HashlibAlgorithmImpl

ALGORITHM_ALIASES = {
    "xxh128": lambda: XXHashAlgorithmImpl("xxh128"),
    "xxh64": lambda: XXHashAlgorithmImpl("xxh64"),
    "md5": lambda: HashlibAlgorithmImpl("md5"),
    "sha256": lambda: HashlibAlgorithmImpl("sha256"),
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Content hash used to compare files:\n"
    "  xxh128 : 128-bit xxHash3 (default, fastest)\n"
    "  xxh64  : 64-bit xxHash\n"
    "  md5    : MD5 (hashlib)\n"
    "  sha256 : SHA-256 (hashlib, slowest)\n"
)

ACTION_ALIASES = {
    "l": "list",
    "m": "move",
    "d": "delete",
    "i": "ignore",
}

ACTION_CHOICES = list(ACTION_ALIASES.values())

ACTION_PROMPT = "Do you want to list, move, delete, or ignore the duplicates? (l/m/d/i): "

EPILOG_TEXT = """
Examples:
  Scan a folder and choose what to do interactively
  %(prog)s -i ~/Downloads

  Only print duplicate groups (for scripts)
  %(prog)s -i ~/Downloads --action list

  Move every redundant copy into another folder without confirmation
  %(prog)s -i ~/Downloads --action move --dest ~/dupes --force

  Send redundant copies to the system trash, 4 hashing workers, MD5 digests
  %(prog)s -i ~/Downloads -w 4 -a md5 --action delete --trash
"""
