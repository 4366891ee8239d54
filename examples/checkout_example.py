"""
Checkout — preview, submit, pay the next installment.

Level 5: checkout.flow
Level 4: checkout.order / checkout.pricing
Level 2: kungfu.Result
"""

from datetime import date

from kungfu import Ok, Error

from checkout import flow as F
from checkout import order as O
from checkout import pricing as P
from checkout.config import CheckoutSettings
from checkout.domain import OrderItem, Payer
from checkout.errors import ValidationErrors
from examples._infra import FakeApi, banner, run

SETTINGS = CheckoutSettings(redirect_delay_seconds=0.2)


def show_summary(preview: F.CheckoutPreview) -> None:
    summary = preview.summary
    print(f"  {preview.product.name} ({preview.selected_price.title or 'harga normal'})")
    if summary.shadow_price is not None:
        print(f"  coret:      {P.format_rupiah(summary.shadow_price)}")
    print(f"  harga:      {P.format_rupiah(summary.base_price)}")
    print(f"  diskon:     {P.format_rupiah(summary.discount.discount_amount)}")
    if summary.shows_tax:
        print(f"  PPN {summary.tax_percent}%:    {P.format_rupiah(summary.tax_amount)}")
    print(f"  total:      {P.format_rupiah(summary.grand_total)}")
    for period in summary.schedule:
        print(f"    cicilan {period.number}: {P.format_rupiah(period.amount)}")
    for notice in preview.notices:
        print(f"  ! kupon {notice.code} diabaikan: {notice.reason}")


async def main() -> None:
    api = FakeApi()
    gateways = api.gateways()
    today = date(2026, 10, 18)

    banner(f"Preview ({P.format_date(today)})")
    match await F.prepare_checkout(
        gateways, "DA-BOOTCAMP", coupon_code="HEMAT10", installment_count=3, now=today
    ):
        case Ok(preview):
            show_summary(preview)
        case Error(err):
            print(f"  ✗ {err}")
            return

    banner("Preview with a broken coupon")
    broken = await F.prepare_checkout(gateways, "DA-BOOTCAMP", coupon_code="RUSAK", now=today)
    show_summary(broken.unwrap())

    payload = (
        O.PayloadBuilder()
        .payer(Payer(name="Siti Rahma", email="siti@mail.id", phone="0812"))
        .set("payment", "payment_method", "BCA_VA")
        .items(OrderItem(product_id=preview.product.id, price_id=preview.selected_price.tier_id))
        .installment(3)
    )

    banner("Submit: short phone number")
    submission = F.OrderSubmissionFlow(gateways, settings=SETTINGS)
    match await submission.submit(
        preview.product, preview.selected_price, preview.coupon, payload.build(),
        authenticated=False,
    ):
        case Error(ValidationErrors() as errors):
            for name, message in errors.as_dict().items():
                print(f"  ✗ {name}: {message}")
        case other:
            print(f"  unexpected: {other}")

    banner("Submit: account already exists")
    api.sign_in_error = "Invalid password"
    fixed = payload.update("payer", **{"payer.phone": "081234567890"}).build()
    match await submission.submit(
        preview.product, preview.selected_price, preview.coupon, fixed,
        authenticated=False,
    ):
        case Ok(done):
            print(f"  ✓ Pay {P.format_rupiah(done.summary.payable_now)} at {done.redirect.url}")
        case Error(err):
            print(f"  ✗ {err}")
    print(f"  states: {' → '.join(t.target.value for t in submission.transitions)}")

    banner("Pay next installment")
    history = await gateways.history.get_history_by_product_id("user-1", preview.product.id)
    installment = F.PayInstallmentFlow(gateways, history.installments[0], settings=SETTINGS)
    print(f"  {installment.label}")
    match await installment.pay(fixed):
        case Ok(redirect):
            print(f"  ✓ {redirect.label}: {redirect.url}")
        case Error(err):
            print(f"  ✗ {getattr(err, 'user_message', err)}")


if __name__ == "__main__":
    run(main)
