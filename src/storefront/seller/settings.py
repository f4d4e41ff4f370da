"""Shop settings and messaging account linkage — commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.seller.seller import Seller


@storefront.command(part_of="Seller")
class UpdateShopSettings:
    seller_id = Identifier(required=True)
    shop_name = String(max_length=100)
    phone = String(max_length=20)
    promptpay_id = String(max_length=20)
    pickup_address = String(max_length=500)
    pickup_lat = Float()
    pickup_lng = Float()
    profile_image_url = String(max_length=500)


@storefront.command(part_of="Seller")
class LinkMessagingAccount:
    seller_id = Identifier(required=True)
    account_id = String(required=True, max_length=100)


@storefront.command(part_of="Seller")
class UnlinkMessagingAccount:
    seller_id = Identifier(required=True)


@storefront.command_handler(part_of=Seller)
class ShopSettingsHandler:
    @handle(UpdateShopSettings)
    def update_shop_settings(self, command):
        repo = current_domain.repository_for(Seller)
        seller = repo.get(command.seller_id)
        seller.update_settings(
            shop_name=command.shop_name,
            phone=command.phone,
            promptpay_id=command.promptpay_id,
            pickup_address=command.pickup_address,
            pickup_lat=command.pickup_lat,
            pickup_lng=command.pickup_lng,
            profile_image_url=command.profile_image_url,
        )
        repo.add(seller)

    @handle(LinkMessagingAccount)
    def link_messaging_account(self, command):
        repo = current_domain.repository_for(Seller)
        seller = repo.get(command.seller_id)
        seller.link_messaging_account(command.account_id)
        repo.add(seller)

    @handle(UnlinkMessagingAccount)
    def unlink_messaging_account(self, command):
        repo = current_domain.repository_for(Seller)
        seller = repo.get(command.seller_id)
        seller.unlink_messaging_account()
        repo.add(seller)
