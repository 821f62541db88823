"""
Tests for program derived address computation
"""

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from solana_offchain import addresses
from solana_offchain.addresses import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    associated_token_address,
    create_program_address,
    derive,
    find_program_address,
    parse_address,
)
from solana_offchain.errors import DerivationError, ValidationError

from ledger_fakes import TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID


USDC_MINT = Pubkey.from_string("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v")


@pytest.mark.unit
class TestDerive:
    def test_matches_spl_associated_token_address(self):
        owner = Keypair().pubkey()
        expected = get_associated_token_address(owner, USDC_MINT)
        assert associated_token_address(owner, USDC_MINT, TOKEN_PROGRAM_ID) == expected

    def test_matches_solders_find_program_address(self):
        seeds = [b"vault", bytes(Keypair().pubkey())]
        program_id = Keypair().pubkey()
        assert find_program_address(seeds, program_id) == Pubkey.find_program_address(seeds, program_id)

    def test_is_deterministic(self):
        owner = Pubkey.from_string("9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM")
        first = associated_token_address(owner, USDC_MINT, TOKEN_2022_PROGRAM_ID)
        second = derive([owner, TOKEN_2022_PROGRAM_ID, USDC_MINT], ASSOCIATED_TOKEN_PROGRAM_ID)
        assert first == second

    def test_token_program_changes_the_address(self):
        owner = Keypair().pubkey()
        classic = associated_token_address(owner, USDC_MINT, TOKEN_PROGRAM_ID)
        token_2022 = associated_token_address(owner, USDC_MINT, TOKEN_2022_PROGRAM_ID)
        assert classic != token_2022

    def test_derived_address_is_off_curve(self):
        address = associated_token_address(Keypair().pubkey(), USDC_MINT, TOKEN_PROGRAM_ID)
        assert not address.is_on_curve()

    def test_create_program_address_rejects_on_curve_hash(self):
        """The bump found by the search is the first one that yields a valid address"""
        # about half of all seed sets reject bump 255
        found = [
            ([b"vault", bytes([i])], find_program_address([b"vault", bytes([i])], TOKEN_PROGRAM_ID)[1])
            for i in range(64)
        ]
        seeds, bump = next((seeds, bump) for seeds, bump in found if bump < 255)

        for rejected in range(255, bump, -1):
            with pytest.raises(DerivationError):
                create_program_address(seeds + [bytes([rejected])], TOKEN_PROGRAM_ID)
        assert create_program_address(seeds + [bytes([bump])], TOKEN_PROGRAM_ID) == derive(seeds, TOKEN_PROGRAM_ID)


@pytest.mark.unit
class TestDerivationErrors:
    def test_seed_too_long(self):
        with pytest.raises(DerivationError):
            derive([b"x" * 33], TOKEN_PROGRAM_ID)

    def test_too_many_seeds(self):
        with pytest.raises(DerivationError):
            derive([b"s"] * 16, TOKEN_PROGRAM_ID)

    def test_create_program_address_rejects_too_many_seeds(self):
        with pytest.raises(DerivationError):
            create_program_address([b"s"] * 17, TOKEN_PROGRAM_ID)

    def test_exhausted_search_space(self, monkeypatch):
        def always_on_curve(seeds, program_id):
            raise DerivationError("Derived address lies on the ed25519 curve")

        monkeypatch.setattr(addresses, "create_program_address", always_on_curve)
        with pytest.raises(DerivationError, match="No viable bump seed"):
            derive([b"seed"], TOKEN_PROGRAM_ID)


@pytest.mark.unit
class TestParseAddress:
    def test_parses_base58(self):
        assert parse_address(str(USDC_MINT)) == USDC_MINT

    def test_passes_pubkey_through(self):
        assert parse_address(USDC_MINT) is USDC_MINT

    def test_rejects_garbage(self):
        with pytest.raises(ValidationError):
            parse_address("not-an-address")
