"""Product catalogue management — commands and handler.

Every command carries the acting seller; a product owned by someone else is
reported as not found.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product
from storefront.seller.seller import Seller


@storefront.command(part_of="Product")
class AddProduct:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    price = Integer(required=True, min_value=0)
    description = Text()
    image_url = String(max_length=500)
    sort_order = Integer(default=0)
    is_active = Boolean(default=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(max_length=200)
    price = Integer(min_value=0)
    description = Text()
    image_url = String(max_length=500)
    sort_order = Integer()


@storefront.command(part_of="Product")
class SetProductVisibility:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    is_active = Boolean(required=True)


@storefront.command(part_of="Product")
class DeleteProduct:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _owned_product(repo, product_id, seller_id) -> Product:
    product = repo.get(product_id)
    if not product.belongs_to(seller_id):
        raise ObjectNotFoundError(f"Product `{product_id}` was not found")
    return product


@storefront.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(AddProduct)
    def add_product(self, command):
        # Raises ObjectNotFoundError for an unknown seller
        current_domain.repository_for(Seller).get(command.seller_id)

        product = Product.create(
            seller_id=command.seller_id,
            name=command.name,
            price=command.price,
            description=command.description,
            image_url=command.image_url,
            sort_order=command.sort_order,
            is_active=command.is_active if command.is_active is not None else True,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, command.seller_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            image_url=command.image_url,
            sort_order=command.sort_order,
        )
        repo.add(product)

    @handle(SetProductVisibility)
    def set_visibility(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, command.seller_id)
        product.set_visibility(command.is_active)
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = _owned_product(repo, command.product_id, command.seller_id)
        repo._dao.delete(product)
