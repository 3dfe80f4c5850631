import pytest

from ezlogger.crypt import (
    AESCrypt,
    Crypt,
    binary_key_to_hex,
    generate_ecdh_key,
    generate_ecdh_shared_key,
    hex_key_to_binary,
)


def test_binary_to_hex_is_upper_case():
    assert binary_key_to_hex(b"\x00\xff\x10") == "00FF10"


def test_hex_round_trip():
    data = bytes(range(256))
    assert hex_key_to_binary(binary_key_to_hex(data)) == data


def test_hex_decoding_accepts_lower_case():
    assert hex_key_to_binary("00ff10") == b"\x00\xff\x10"


def test_hex_decoding_rejects_garbage():
    with pytest.raises(ValueError):
        hex_key_to_binary("zz")


def test_ecdh_key_lengths_and_point_format():
    private_key, public_key = generate_ecdh_key()
    assert len(private_key) == 32
    assert len(public_key) == 65
    assert public_key[0] == 0x04


def test_ecdh_keys_are_fresh():
    pairs = [generate_ecdh_key() for _ in range(3)]
    assert len({private_key for private_key, _ in pairs}) == 3
    assert len({public_key for _, public_key in pairs}) == 3


def test_ecdh_agreement_is_symmetric():
    client_pri, client_pub = generate_ecdh_key()
    server_pri, server_pub = generate_ecdh_key()
    shared_a = generate_ecdh_shared_key(client_pri, server_pub)
    shared_b = generate_ecdh_shared_key(server_pri, client_pub)
    assert shared_a == shared_b
    assert len(shared_a) == 32


def test_ecdh_rejects_invalid_public_key():
    client_pri, _ = generate_ecdh_key()
    with pytest.raises(RuntimeError):
        generate_ecdh_shared_key(client_pri, b"\x04" + b"\x00" * 64)


def test_ecdh_rejects_zero_private_key():
    _, server_pub = generate_ecdh_key()
    with pytest.raises(RuntimeError):
        generate_ecdh_shared_key(b"\x00" * 32, server_pub)


def test_generated_key_and_iv_are_16_bytes_hex():
    key_hex = AESCrypt.generate_key()
    iv_hex = AESCrypt.generate_iv()
    assert len(hex_key_to_binary(key_hex)) == 16
    assert len(hex_key_to_binary(iv_hex)) == 16
    assert key_hex == key_hex.upper()


@pytest.mark.parametrize("plain", [b"", b"hello", b"x" * 16, bytes(range(200))])
def test_aes_round_trip(plain):
    cipher = AESCrypt(AESCrypt.generate_key())
    encrypted = cipher.encrypt(plain)
    assert len(encrypted) % 16 == 0
    assert len(encrypted) > len(plain) + 16 - 1
    assert cipher.decrypt(encrypted) == plain


def test_aes_uses_fresh_iv_each_time():
    cipher = AESCrypt(AESCrypt.generate_key())
    first = cipher.encrypt(b"same text")
    second = cipher.encrypt(b"same text")
    assert first[:16] != second[:16]
    assert cipher.decrypt(first) == cipher.decrypt(second) == b"same text"


def test_aes_with_shared_ecdh_key():
    client_pri, client_pub = generate_ecdh_key()
    server_pri, server_pub = generate_ecdh_key()
    key_hex = binary_key_to_hex(generate_ecdh_shared_key(client_pri, server_pub))
    peer_hex = binary_key_to_hex(generate_ecdh_shared_key(server_pri, client_pub))
    encrypted = AESCrypt(key_hex).encrypt(b"log line")
    assert AESCrypt(peer_hex).decrypt(encrypted) == b"log line"


def test_aes_is_a_crypt():
    cipher: Crypt = AESCrypt(AESCrypt.generate_key())
    assert cipher.decrypt(cipher.encrypt(b"abc")) == b"abc"


def test_decrypt_too_short():
    cipher = AESCrypt(AESCrypt.generate_key())
    with pytest.raises(ValueError, match="too short"):
        cipher.decrypt(b"\x00" * 15)


def test_decrypt_iv_only_fails():
    cipher = AESCrypt(AESCrypt.generate_key())
    with pytest.raises(ValueError):
        cipher.decrypt(b"\x00" * 16)


def test_decrypt_partial_block_fails():
    cipher = AESCrypt(AESCrypt.generate_key())
    encrypted = cipher.encrypt(b"hello")
    with pytest.raises(ValueError):
        cipher.decrypt(encrypted[:-1])


def test_bad_key_length_rejected():
    with pytest.raises(ValueError):
        AESCrypt("00112233")


def test_non_hex_key_rejected():
    with pytest.raises(ValueError):
        AESCrypt("placeholder")