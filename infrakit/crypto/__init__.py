"""Digests, AES-CBC encryption and RSA SHA-256 signatures."""