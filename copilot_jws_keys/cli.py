# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Command line tools for JWS signing keys.

Options not given on the command line are read from the ``JWS_KEY_*``
environment variables (see ``copilot_jws_keys.config``).

Usage:
    python -m copilot_jws_keys generate --algorithm ES256 --output-dir secrets/
    python -m copilot_jws_keys jwk --public-key secrets/public.pem --kid my-key
    JWS_KEY_PRIVATE_KEY_PATH=secrets/private.pem JWS_KEY_ID=my-key python -m copilot_jws_keys jwk
"""

import argparse
import json
import os
import sys
from pathlib import Path

from .config import KeyDriverConfig
from .exceptions import JWSKeyError
from .factory import create_signing_key
from .variants import SomePrivateKey, SomePublicKey

PRIVATE_KEY_FILE = "private.pem"
PUBLIC_KEY_FILE = "public.pem"


def _driver_config(driver_name: str, **overrides) -> KeyDriverConfig:
    """Environment settings for ``driver_name`` with command line values on top."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    return KeyDriverConfig.from_env(driver_name).with_updates(**updates)


def _write_private_key(path: Path, pem: bytes) -> None:
    # Owner-only from creation on; fchmod also covers an overwritten file.
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as f:
        os.fchmod(f.fileno(), 0o600)
        f.write(pem)


def _generate(args: argparse.Namespace) -> int:
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    private_key_path = output_dir / PRIVATE_KEY_FILE
    public_key_path = output_dir / PUBLIC_KEY_FILE

    if not args.force and (private_key_path.exists() or public_key_path.exists()):
        print(f"Keys already exist in {output_dir} (use --force to overwrite)")
        return 0

    config = _driver_config("generate", algorithm=args.algorithm, rsa_bits=args.rsa_bits)
    key = create_signing_key("generate", config)

    _write_private_key(private_key_path, key.private_key_to_pem_pkcs8())
    public_key_path.write_bytes(key.public_key_to_pem())

    print(f"Generated {key.alg} key pair:")
    print(f"  private key: {private_key_path}")
    print(f"  public key:  {public_key_path}")
    return 0


def _jwk(args: argparse.Namespace) -> int:
    overrides = {"rsa_algorithm": args.rsa_algorithm, "key_id": args.kid}
    if args.private_key:
        overrides["private_key_path"] = args.private_key
    config = _driver_config("pem", **overrides)

    if args.public_key:
        key: SomePrivateKey | SomePublicKey = SomePublicKey.from_pem(
            Path(args.public_key).read_bytes(),
            key_id=config.key_id,
        )
    else:
        if args.private_key:
            # An explicit file wins over an inline key from the environment.
            config = config.with_updates(private_key=None)
        key = create_signing_key("pem", config)

    print(json.dumps(key.public_key_to_jwk().to_dict(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m copilot_jws_keys",
        description="Generate JWS signing keys and export public JWKs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a key pair as PEM files")
    generate.add_argument(
        "--algorithm",
        help="JWS algorithm: ES256, ES384, ES512, RS256, RS384, RS512, PS256, PS384, PS512 "
        "or EdDSA (default: $JWS_KEY_ALGORITHM)",
    )
    generate.add_argument(
        "--output-dir",
        required=True,
        help="Directory for private.pem and public.pem",
    )
    generate.add_argument(
        "--rsa-bits",
        type=int,
        help="RSA modulus size in bits, RSA algorithms only (default: $JWS_KEY_RSA_BITS or 2048)",
    )
    generate.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing key files",
    )
    generate.set_defaults(handler=_generate)

    jwk = subparsers.add_parser(
        "jwk",
        help="Print the public JWK of a PEM key",
        description="Without --public-key or --private-key the key comes from "
        "$JWS_KEY_PRIVATE_KEY or $JWS_KEY_PRIVATE_KEY_PATH.",
    )
    source = jwk.add_mutually_exclusive_group()
    source.add_argument("--public-key", help="Path to a public key PEM")
    source.add_argument("--private-key", help="Path to a private key PEM")
    jwk.add_argument(
        "--rsa-algorithm",
        help="Algorithm for an RSA private key (default: $JWS_KEY_RSA_ALGORITHM or RS256)",
    )
    jwk.add_argument("--kid", help="Key ID to include in the JWK (default: $JWS_KEY_ID)")
    jwk.set_defaults(handler=_jwk)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (JWSKeyError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
