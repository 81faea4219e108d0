from cachebuster.core.models import MimeMode, HashAlgorithmName

MIME_MODE_ALIASES = {
    "strict": MimeMode.STRICT,
    "permissive": MimeMode.PERMISSIVE,
}

MIME_MODE_CHOICES = list(MIME_MODE_ALIASES.keys())

MIME_MODE_HELP_TEXT = (
    "What to do with files whose MIME type can't be guessed (only with --mime-types):\n"
    "  strict     : Abort the run (default)\n"
    "  permissive : Skip the file silently\n"
)

ALGORITHM_ALIASES = {
    "sha256": HashAlgorithmName.SHA256,
    "xxh64": HashAlgorithmName.XXH64,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Content hash embedded in file names:\n"
    "  sha256 : SHA-256, 64 hex characters (default)\n"
    "  xxh64  : xxHash64, 16 hex characters. NOT cryptographic: two different\n"
    "           files can get the same name. Only for trusted build inputs\n"
)

EPILOG_TEXT = """
Examples:
  Fingerprint every file in ./dist into ./prod
  %(prog)s -s ./dist -r ./prod

  Only fingerprint images, copy everything else unchanged
  %(prog)s -s ./dist -r ./prod -t image/png image/svg+xml image/jpeg

  Keep vendor files and wasm modules under their original names
  %(prog)s -s ./dist -r ./prod --no-hash-paths swagger-ui-bundle.js --no-hash-extensions wasm

  Serve from a route prefix and export the map for the application
  %(prog)s -s ./dist -r /tmp/prod --prefix /static --print-env > cachebuster.env

  Read options from [tool.cachebuster] in pyproject.toml
  %(prog)s --config pyproject.toml
"""
