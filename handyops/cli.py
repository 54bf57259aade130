"""
Flask CLI commands:  flask init-db / flask seed-catalog
"""
import click

from handyops import db
from handyops.catalog import CatalogService

SAMPLE_SERVICES = [
    {
        'name': 'Drywall Installation',
        'category': 'Drywall',
        'description': 'Hang, tape and finish new drywall panels',
        'pricing_type': 'hourly',
        'hourly_rate': 45,
        'estimated_duration_hours': 2,
    },
    {
        'name': 'Drywall Patch',
        'category': 'Drywall',
        'description': 'Patch and texture small holes or cracks',
        'pricing_type': 'flat',
        'flat_rate': 95,
        'estimated_duration_hours': 1,
    },
    {
        'name': 'Faucet Replacement',
        'category': 'Plumbing',
        'description': 'Remove old faucet and install a customer-supplied fixture',
        'pricing_type': 'flat',
        'flat_rate': 150,
        'estimated_duration_hours': 1.5,
    },
    {
        'name': 'Outlet Installation',
        'category': 'Electrical',
        'description': 'Install or replace a standard electrical outlet',
        'pricing_type': 'flat',
        'flat_rate': 85,
        'estimated_duration_hours': 0.5,
    },
    {
        'name': 'Interior Painting',
        'category': 'Painting',
        'description': 'Prep and paint interior walls, per room',
        'pricing_type': 'hourly',
        'hourly_rate': 40,
        'estimated_duration_hours': 4,
    },
    {
        'name': 'Furniture Assembly',
        'category': 'General Repair',
        'description': 'Assemble flat-pack furniture',
        'pricing_type': 'hourly',
        'hourly_rate': 50,
        'estimated_duration_hours': 1,
    },
]


def register_commands(app):

    @app.cli.command('init-db')
    def cli_init_db():
        """Create all database tables."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('seed-catalog')
    def cli_seed_catalog():
        """Add the sample services that are not in the catalog yet."""
        from handyops.store import get_stores

        catalog = CatalogService(get_stores().services)
        existing = {service['name'] for service in catalog.list_services()}
        added = 0
        for data in SAMPLE_SERVICES:
            if data['name'] in existing:
                continue
            service = catalog.create_service(data)
            click.echo('  -> {} ({})'.format(service['name'], service['category']))
            added += 1
        click.echo('Seeded {} service(s).'.format(added))
