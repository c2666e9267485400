"""
Air-Gapped Vault
^^^^^^^^^^^^^^^^

An offline signer for Ethereum transactions. Unsigned transactions arrive as
hex strings (typically scanned from a QR code on an online machine), are
decoded into an immutable model for review, and are signed with a private key
that never leaves the offline device. The signed transaction is handed back as
hex for broadcasting elsewhere.

The package contains:

* a Recursive Length Prefix codec (:mod:`airgap_vault.rlp`),
* the transaction model and the typed-envelope dispatcher
  (:mod:`airgap_vault.transactions`),
* the signing engine (:mod:`airgap_vault.signing`),
* value formatting helpers (:mod:`airgap_vault.utils.formatting`).
"""

__version__ = "0.1.0"
