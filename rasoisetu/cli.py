"""Command line tasks registered on the Flask app."""

import click
from flask import Blueprint, current_app

from rasoisetu.core.store import get_store
from rasoisetu.group_order.services import GroupOrderService

group_orders_cli = Blueprint("group_orders_cli", __name__, cli_group="group-orders")


@group_orders_cli.cli.command("reconcile")
def reconcile_command():
    """Mark active group orders completed or expired.

    Meant to run on a schedule (cron, Cloud Scheduler).
    """
    counts = GroupOrderService.reconcile_group_orders(get_store())
    current_app.logger.info(f"Reconciled group orders: {counts}")
    click.echo(
        f"Completed {counts['completed']} and expired {counts['expired']} group orders."
    )
