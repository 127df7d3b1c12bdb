"""
Constants and configuration values for the NIST Downsampler.

This module centralizes the filter contract, the provenance tag written into
every output file, and the command-line constants.

The Gaussian filter values below are fixed by NIST IR 7839 and
NIST SP 500-289 (anti-aliasing before 2:1 decimation of biometric images).
They are not tunable: changing either one changes every output pixel.
"""

# Gaussian filter contract (NIST IR 7839 / NIST SP 500-289)
KERNEL_RADIUS = 4
KERNEL_SIGMA = 0.8475

# Decimation keeps samples whose index has this parity
DECIMATION_FACTOR = 2
DECIMATION_PHASE = 1

# 8-bit sample range
SAMPLE_MIN = 0
SAMPLE_MAX = 255

# Provenance tag stamped into each output file (NIST Downsampler 1.0.0)
DOWNSAMPLER_ID = (
    "DsmID: NIST-000000000000100 "
    "Resvd: cf3357659812d6ba14d52225977cfdcf6e863d20e04567744c1bfd1e7c9acb27 "
)

# Output file format
OUTPUT_EXTENSION = "pgm"
OUTPUT_SAVE_FORMAT = "PPM"  # Pillow writes PGM through its PPM plugin
PGM_MAGIC_LENGTH = 3  # "P5" plus its separator
PGM_COMMENT_PREFIX = b"#"
PGM_COMMENT_SUFFIX = b"\n"

# Command line
HELP_FLAGS = ("-h", "-help", "?")
EXPECTED_ARGUMENT_COUNT = 2
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# Logging
LOG_LEVEL_ENV_VAR = "ND_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Pipeline node types
NODE_TYPE_IMAGE_IMPORT = "Image Import"
NODE_TYPE_GAUSSIAN_FILTER = "Gaussian Filter"
NODE_TYPE_DECIMATE = "Decimate"
NODE_TYPE_OUTPUT = "Output"

# Node field names
FIELD_NODE_ID = "id"
FIELD_NODE_TYPE = "type"
FIELD_NODE_INPUTS = "inputs"
