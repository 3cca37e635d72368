"""
Repositories - data access layer.

Each store takes the database client in its constructor, which keeps the
services testable without patching imports.

Usage with dependency injection:
    from fastapi import Depends
    from app.repositories.campaign import CampaignRepository
    from app.repositories.deps import get_campaign_repo

    @router.get("/campaigns")
    async def list_campaigns(
        repo: CampaignRepository = Depends(get_campaign_repo)
    ):
        return await repo.list_all()

Usage in tests:
    repo = CustomerRepository(MockDatabase(table_data=[...]))

Stores:
- customer: Customer Store (population)
- campaign: Campaign Store
- delivery_log: Delivery Log Store

Import from the submodules; the campaign stores depend on
app.services.campaigns.types, which itself needs the Customer entity.
"""
