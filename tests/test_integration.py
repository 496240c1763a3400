#!/usr/bin/env python3
"""
ATOL Online — Integration Test Script
=====================================
Runs the full flow against the ATOL test environment (testonline.atol.ru).

Usage:
  python tests/test_integration.py \
    --login v4-login --password secret --group-code group_1 \
    --inn 5544332219 --email shop@example.com \
    --payment-address https://shop.example.com

  --poll N    poll the report up to N times (2s apart) until it leaves "wait"
"""

import sys
import pytest
pytestmark = pytest.mark.skip(reason="Standalone script, not a pytest test")
import argparse
import logging
import time

from atol_online import (
    AtolClient,
    AtolEnvironment,
    AtolSettings,
    AuthError,
    ClientError,
    Client,
    Company,
    Item,
    Payment,
    PaymentType,
    Receipt,
    Sell,
    Vat,
    VatType,
)


class Colors:
    OK = "\033[92m"
    FAIL = "\033[91m"
    WARN = "\033[93m"
    BOLD = "\033[1m"
    END = "\033[0m"


passed = 0
failed = 0


def test(name: str, condition: bool, detail: str = ""):
    global passed, failed
    if condition:
        print(f"  {Colors.OK}✓{Colors.END} {name}")
        passed += 1
    else:
        print(f"  {Colors.FAIL}✗{Colors.END} {name}: {detail}")
        failed += 1
    return condition


def run_tests(args):
    settings = AtolSettings(
        login=args.login,
        password=args.password,
        group_code=args.group_code,
        environment=AtolEnvironment.TEST,
    )
    client = AtolClient(settings, logger=logging.getLogger("atol") if args.verbose else None)

    # ═══════════════════════════════════════════════════════════
    print(f"\n{Colors.BOLD}1. TOKEN{Colors.END}")
    # ═══════════════════════════════════════════════════════════

    try:
        token = client.token_manager.get_token(settings.login, settings.password)
    except AuthError as e:
        test("getToken", False, e.message)
        print(f"  {Colors.FAIL}ABORTING: no token.{Colors.END}")
        return
    test("getToken returns a token", bool(token))

    again = client.token_manager.get_token(settings.login, settings.password)
    test("second getToken served from cache", again == token)

    # ═══════════════════════════════════════════════════════════
    print(f"\n{Colors.BOLD}2. SELL{Colors.END}")
    # ═══════════════════════════════════════════════════════════

    document = Sell(receipt=Receipt(
        client=Client(email=args.email),
        company=Company(email=args.email, sno="osn", inn=args.inn,
                        payment_address=args.payment_address),
        items=[Item(name="Integration test item", price=1.0, quantity=1, sum=1.0,
                    vat=Vat(type=VatType.NONE))],
        payments=[Payment(type=PaymentType.ELECTRONIC, sum=1.0)],
        total=1.0,
    ))

    try:
        uuid = client.send(document)
    except ClientError as e:
        test("sell accepted", False, e.message)
        return
    test("sell accepted, uuid assigned", len(uuid) == 36)
    print(f"    → uuid: {uuid}")

    # ═══════════════════════════════════════════════════════════
    print(f"\n{Colors.BOLD}3. STALE TOKEN RECOVERY{Colors.END}")
    # ═══════════════════════════════════════════════════════════

    client.token_manager.cache.set(client.token_manager.cache_key(settings.login), "stale", 60)
    try:
        second = client.send(Sell(receipt=document.receipt))
        test("sell with stale cached token recovers", bool(second))
    except ClientError as e:
        test("sell with stale cached token recovers", False, e.message)

    # ═══════════════════════════════════════════════════════════
    print(f"\n{Colors.BOLD}4. REPORT{Colors.END}")
    # ═══════════════════════════════════════════════════════════

    report = None
    for _ in range(max(args.poll, 1)):
        try:
            report = client.get_report(uuid)
        except ClientError as e:
            test("report", False, e.message)
            return
        if not report.is_pending:
            break
        time.sleep(2)

    test("report uuid matches", report.uuid == uuid)
    print(f"    → status: {report.status}")
    if report.is_done:
        test("report payload present", report.payload is not None)
        print(f"    → fiscal_document_number: {report.payload.fiscal_document_number}")

    client.close()


def main():
    parser = argparse.ArgumentParser(description="ATOL Online Integration Tests")
    parser.add_argument("--login", required=True, help="ATOL login")
    parser.add_argument("--password", required=True, help="ATOL password")
    parser.add_argument("--group-code", required=True, help="ATOL group code")
    parser.add_argument("--inn", required=True, help="Company INN")
    parser.add_argument("--email", default="shop@example.com")
    parser.add_argument("--payment-address", default="https://shop.example.com")
    parser.add_argument("--poll", type=int, default=5)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    print(f"\n{'=' * 60}")
    print("ATOL Online — Integration Tests")
    print(f"Target: testonline.atol.ru, group {args.group_code}")
    print(f"{'=' * 60}")

    start = time.time()
    run_tests(args)
    elapsed = time.time() - start

    print(f"\n{'=' * 60}")
    total = passed + failed
    if failed:
        print(f"{Colors.FAIL}RESULT: {passed}/{total} passed, {failed} failed ({elapsed:.1f}s){Colors.END}")
        sys.exit(1)
    else:
        print(f"{Colors.OK}RESULT: {passed}/{total} passed ({elapsed:.1f}s){Colors.END}")


if __name__ == "__main__":
    main()
