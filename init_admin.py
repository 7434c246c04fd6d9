"""
Initialize the administrator account.
Creates the tables and the default admin used for the first login.
"""
import asyncio

from autostore.core.config import get_settings
from autostore.core.container import ApplicationContainer
from autostore.infrastructure.database import init_db
from autostore.modules.accounts import AccountService


async def create_default_admin():
    """Create the default admin account if no user exists."""
    settings = get_settings()
    container = ApplicationContainer.build(settings)
    try:
        await init_db(container.engine)

        async with container.session_factory() as db:
            service = AccountService.with_session(db)
            account = await service.ensure_default_admin(
                settings.bootstrap.admin_username,
                settings.bootstrap.admin_password,
            )
            await db.commit()
    finally:
        await container.dispose()

    if account is None:
        print("An account already exists, nothing to initialize")
        return

    print("=" * 50)
    print("Default admin account created!")
    print("=" * 50)
    print(f"Username: {settings.bootstrap.admin_username}")
    print(f"Password: {settings.bootstrap.admin_password}")
    print("=" * 50)
    print("Change BOOTSTRAP__ADMIN_PASSWORD before exposing the service!")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin())
