"""Configuration constants for fixedmerkle."""

# Value held by every storage slot until its leaf, or both of its children,
# have been assigned.  It never equals a real digest produced by the bundled
# hashers, so a tree that still contains it is visibly incomplete.
PLACEHOLDER_DIGEST = b""

# Name of the hasher used by the command line when ``--hasher`` is omitted.
DEFAULT_HASHER = "sha256"

# Side tags used by the binary proof encoding.
SIDE_TAG_LEFT = 0x00
SIDE_TAG_RIGHT = 0x01

# The step count of an encoded proof is stored in a single byte.
MAX_PROOF_STEPS = 0xFF

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
