#!/usr/bin/env python3

import aws_cdk as cdk

from hotel_booking_stack import HotelBookingStack

app = cdk.App()
HotelBookingStack(
    app,
    "HotelBookingStack",
    user_pool_arn=app.node.get_context("user_pool_arn"),
    paypal_mode=app.node.try_get_context("paypal_mode") or "sandbox",
    payment_return_url=app.node.try_get_context("payment_return_url") or "",
    payment_cancel_url=app.node.try_get_context("payment_cancel_url") or "",
)

app.synth()
