#!/usr/bin/env python3
"""
Admin credential generator.
Prints the ADMIN_EMAIL and ADMIN_PASSWORD_HASH lines for your .env file.
"""
import getpass

from app.utils.auth import hash_password, verify_password


def main():
    print("=" * 60)
    print("Admin Account Setup")
    print("=" * 60)
    print()

    email = input("Admin email: ").strip()
    if not email:
        print("\nError: Email cannot be empty")
        return

    password = getpass.getpass("Admin password: ")
    if len(password) < 8:
        print("\nError: Password must be at least 8 characters")
        return

    if password != getpass.getpass("Confirm password: "):
        print("\nError: Passwords do not match")
        return

    print("\nGenerating hash (this may take a moment)...")
    hashed = hash_password(password)

    if not verify_password(password, hashed):
        print("\nError: Generated hash failed verification")
        return

    print("\nCopy these lines to your .env file:\n")
    print(f"ADMIN_EMAIL={email}")
    print(f"ADMIN_PASSWORD_HASH={hashed}")
    print()
    print("Keep this hash secret and never commit it to version control!")


if __name__ == "__main__":
    main()
