"""
Command line front end for the intake form.

    onboard-register --email a@x.com --password secret
"""

import argparse
import sys

from onboard.client.intake import DEFAULT_BASE_URL, IntakeForm


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Register a student with the onboarding API")
    parser.add_argument("--email", default="", help="Email address (optional)")
    parser.add_argument("--phone", default="", help="Phone number (optional)")
    parser.add_argument("--password", required=True, help="Password")
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Onboarding API base URL (default: {DEFAULT_BASE_URL})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, form: IntakeForm | None = None) -> int:
    args = parse_args(argv)
    form = form or IntakeForm(base_url=args.base_url)
    with form:
        result = form.submit(email=args.email, phone=args.phone, password=args.password)
    print(result.message)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
