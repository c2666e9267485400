"""
Cryptographic primitives used by the signer: Keccak-256 and secp256k1 ECDSA.
"""
