"""
Program Derived Addresses

Deterministic derivation of addresses that have no private key, such as
associated token accounts. Hashing and the off-curve check are done by
solders; this module walks the bump seeds from 255 downward, so the first
valid bump wins and the result is a pure function of its inputs. Seed limits
are checked before hashing.
"""

from typing import Sequence, Union

from solders.pubkey import Pubkey

from .errors import DerivationError, ValidationError


ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")

MAX_SEEDS = 16
MAX_SEED_LEN = 32

SeedLike = Union[bytes, bytearray, Pubkey]


def _seed_bytes(seed: SeedLike) -> bytes:
    return bytes(seed)


def _check_seeds(seeds: Sequence[bytes], max_seeds: int) -> None:
    if len(seeds) > max_seeds:
        raise DerivationError(f"At most {max_seeds} seeds are allowed, got {len(seeds)}")
    for raw in seeds:
        if len(raw) > MAX_SEED_LEN:
            raise DerivationError(f"Seed longer than {MAX_SEED_LEN} bytes ({len(raw)})")


def create_program_address(seeds: Sequence[SeedLike], program_id: Pubkey) -> Pubkey:
    """
    Hash seeds (bump included) into a program address

    Raises:
        DerivationError: Too many seeds, a seed too long, or the hash is on the curve
    """
    raw = [_seed_bytes(seed) for seed in seeds]
    _check_seeds(raw, MAX_SEEDS)
    try:
        return Pubkey.create_program_address(raw, program_id)
    except Exception as e:  # solders.PubkeyError is not importable from a public module
        raise DerivationError(f"Seeds do not produce a valid program address: {e}") from e


def find_program_address(seeds: Sequence[SeedLike], program_id: Pubkey) -> tuple[Pubkey, int]:
    """
    Search for the first valid bump seed

    Args:
        seeds: Ordered seed byte sequences (without bump)
        program_id: Owning program

    Returns:
        Tuple of (address, bump)

    Raises:
        DerivationError: No bump in 255..1 produces an off-curve address
    """
    base = [_seed_bytes(seed) for seed in seeds]
    # one slot is reserved for the bump
    _check_seeds(base, MAX_SEEDS - 1)

    for bump in range(255, 0, -1):
        try:
            return create_program_address(base + [bytes([bump])], program_id), bump
        except DerivationError:
            continue

    raise DerivationError(f"No viable bump seed found for program {program_id}")


def derive(seeds: Sequence[SeedLike], program_id: Pubkey) -> Pubkey:
    """Derived address for seeds under program_id"""
    address, _ = find_program_address(seeds, program_id)
    return address


def associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey,
    associated_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Associated token account of owner for mint, seeds (owner, token program, mint)"""
    return derive([owner, token_program_id, mint], associated_program_id)


def parse_address(address: Union[str, Pubkey]) -> Pubkey:
    """Parse a base58 address, raising ValidationError when malformed"""
    if isinstance(address, Pubkey):
        return address
    try:
        return Pubkey.from_string(address)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid Solana address: {address!r}") from e
