"""Shared BDD fixtures and step definitions for the Invoicing domain."""

import json

import pytest
from pytest_bdd import given, parsers, then
from shared.events.ordering import OrderCreated


@pytest.fixture()
def invoicing_options():
    """Options of the pipeline under test, adjusted by Given steps."""
    return {"fallback_email": ""}


# ---------------------------------------------------------------------------
# Given steps: collaborators
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the shop settings name "{address}" as the operator address'))
def operator_address_in_settings(settings_store, address):
    settings_store.record = {"orders_email": address}


@given("the shop settings store is unreachable")
def settings_unreachable(settings_store):
    settings_store.configure(should_succeed=False)


@given("no fallback operator address is configured")
def no_fallback(invoicing_options):
    invoicing_options["fallback_email"] = ""


@given(parsers.cfparse('the fallback operator address is "{address}"'))
def fallback_address(invoicing_options, address):
    invoicing_options["fallback_email"] = address


@given(parsers.cfparse('the mail transport rejects "{address}"'))
def transport_rejects(mailer, address):
    mailer.configure(failing_recipients={address})


# ---------------------------------------------------------------------------
# Given steps: orders
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('an order {order_id:d} for customer "{email}" with {qty:d} x "{model}" at {price:d}'),
    target_fixture="event",
)
def created_order(order_id, email, qty, model, price):
    return OrderCreated(
        order_id=order_id,
        email=email,
        items=json.dumps([{"model_name": model, "qty": qty, "unit_price": price}]),
    )


# ---------------------------------------------------------------------------
# Then steps: run outcome and deliveries
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the run is "{stage}"'))
def run_stage_is(run, stage):
    assert run.stage.value == stage


@then(parsers.cfparse('emails are sent to "{operator}" and "{customer}"'))
def emails_sent_to(mailer, operator, customer):
    assert [message.to for message in mailer.sent_emails] == [operator, customer]


@then("no email is attempted")
def no_email_attempted(mailer):
    assert mailer.attempts == []


@then(parsers.cfparse('delivery to "{address}" failed'))
def delivery_failed(run, address):
    assert address in [result.to for result in run.dispatch.failed]


@then(parsers.cfparse('delivery to "{address}" succeeded'))
def delivery_succeeded(run, address):
    assert address in [result.to for result in run.dispatch.sent]
