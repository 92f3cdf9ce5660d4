######################################################################
# Copyright 2016, 2024 John J. Rofrano. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
######################################################################

"""
Flask CLI Command Extensions
"""
import click
from flask import current_app as app  # Import Flask application
from console.coordinator import coordinator


######################################################################
# Command to reset the in-memory state to the mock records
######################################################################
@app.cli.command("seed-state")
def seed_state():
    """
    Replaces all users and payments with the mock records
    """
    coordinator.reset(seed=True)
    click.echo(
        f"Seeded {len(coordinator.list_users())} users "
        f"and {len(coordinator.list_payments())} payments"
    )


######################################################################
# Command to empty the in-memory state
######################################################################
@app.cli.command("clear-state")
def clear_state():
    """
    Removes all users and payments
    """
    coordinator.reset(seed=False)
    click.echo("Console state cleared")


######################################################################
# Command to print the dashboard numbers
######################################################################
@app.cli.command("show-stats")
@click.option("--date", "on_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Evaluate promo codes on this date (YYYY-MM-DD)")
def show_stats(on_date):
    """
    Prints total users, active promo codes and pending payments
    """
    stats = coordinator.dashboard_stats(on_date.date() if on_date else None)
    click.echo(f"Total users:      {stats.total_users}")
    click.echo(f"Active promos:    {stats.active_promos}")
    click.echo(f"Pending payments: {stats.pending_payments}")
