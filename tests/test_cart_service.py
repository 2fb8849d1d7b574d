import pytest
from sqlalchemy.exc import OperationalError

from bazaar.data.models.product import ProductModel
from bazaar.domain.errors import (
    ConcurrencyConflict,
    InvalidRequest,
    NotFound,
    OutOfStock,
    StoreUnavailable,
)
from bazaar.repos.cart_repo import CartRepo
from bazaar.services.cart_service import CartService


def stock_of(db, product_id):
    db.expire_all()
    return db.get(ProductModel, product_id).stock


def lines_of(db, user_id):
    db.expire_all()
    repo = CartRepo(db)
    cart = repo.get_cart_by_user(user_id)
    if cart is None:
        return None
    return {i.product_id: i.quantity for i in repo.get_cart_items(cart.id)}


class TestAddToCart:
    def test_first_add_creates_cart_and_decrements_stock(self, db, make_product):
        make_product(1, stock=10)

        cart = CartService(db).add_product(user_id=1, product_id=1, quantity=3)

        assert stock_of(db, 1) == 7
        assert lines_of(db, 1) == {1: 3}
        assert cart["items"][0]["quantity"] == 3

    def test_add_existing_line_increments_quantity(self, db, make_product):
        make_product(1, stock=10)
        svc = CartService(db)

        svc.add_product(user_id=1, product_id=1, quantity=2)
        svc.add_product(user_id=1, product_id=1, quantity=4)

        assert stock_of(db, 1) == 4
        assert lines_of(db, 1) == {1: 6}

    def test_one_line_per_product(self, db, make_product):
        make_product(1, stock=10)
        make_product(2, stock=10)
        svc = CartService(db)

        svc.add_product(user_id=1, product_id=1, quantity=1)
        svc.add_product(user_id=1, product_id=2, quantity=1)
        svc.add_product(user_id=1, product_id=1, quantity=1)

        assert lines_of(db, 1) == {1: 2, 2: 1}

    def test_can_take_whole_stock(self, db, make_product):
        make_product(1, stock=2)

        CartService(db).add_product(user_id=1, product_id=1, quantity=2)

        assert stock_of(db, 1) == 0

    def test_out_of_stock_leaves_stock_and_cart_unchanged(self, db, make_product):
        make_product(1, stock=2)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=1)

        with pytest.raises(OutOfStock):
            svc.add_product(user_id=1, product_id=1, quantity=2)

        assert stock_of(db, 1) == 1
        assert lines_of(db, 1) == {1: 1}

    def test_out_of_stock_does_not_create_cart(self, db, make_product):
        make_product(1, stock=0)

        with pytest.raises(OutOfStock):
            CartService(db).add_product(user_id=1, product_id=1, quantity=1)

        assert lines_of(db, 1) is None

    def test_unknown_product(self, db):
        with pytest.raises(NotFound):
            CartService(db).add_product(user_id=1, product_id=404, quantity=1)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, db, make_product, quantity):
        make_product(1, stock=10)

        with pytest.raises(InvalidRequest):
            CartService(db).add_product(user_id=1, product_id=1, quantity=quantity)

        assert stock_of(db, 1) == 10

    def test_carts_are_per_user(self, db, make_product):
        make_product(1, stock=10)
        svc = CartService(db)

        svc.add_product(user_id=1, product_id=1, quantity=1)
        svc.add_product(user_id=2, product_id=1, quantity=2)

        assert lines_of(db, 1) == {1: 1}
        assert lines_of(db, 2) == {1: 2}
        assert stock_of(db, 1) == 7


class TestRemoveFromCart:
    def test_restores_full_line_quantity(self, db, make_product):
        make_product(1, stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=4)

        cart = svc.remove_product(user_id=1, product_id=1)

        assert stock_of(db, 1) == 10
        assert lines_of(db, 1) == {}
        assert cart["items"] == []

    def test_other_lines_untouched(self, db, make_product):
        make_product(1, stock=10)
        make_product(2, stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=1)
        svc.add_product(user_id=1, product_id=2, quantity=3)

        svc.remove_product(user_id=1, product_id=1)

        assert lines_of(db, 1) == {2: 3}
        assert stock_of(db, 2) == 7

    def test_second_remove_is_not_found_and_keeps_stock(self, db, make_product):
        make_product(1, stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=2)
        svc.remove_product(user_id=1, product_id=1)

        with pytest.raises(NotFound):
            svc.remove_product(user_id=1, product_id=1)
        with pytest.raises(NotFound):
            svc.remove_product(user_id=1, product_id=1)

        assert stock_of(db, 1) == 10

    def test_without_cart(self, db, make_product):
        make_product(1, stock=10)

        with pytest.raises(NotFound):
            CartService(db).remove_product(user_id=1, product_id=1)

    def test_empty_cart_is_kept(self, db, make_product):
        make_product(1, stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=1)
        svc.remove_product(user_id=1, product_id=1)

        cart = svc.get_cart(user_id=1)

        assert cart["items"] == []
        assert cart["total"] == 0


class TestDecrementCartLine:
    def test_reduces_by_one(self, db, make_product):
        make_product(1, stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=3)

        svc.decrement_product(user_id=1, product_id=1)

        assert lines_of(db, 1) == {1: 2}
        assert stock_of(db, 1) == 8

    def test_line_at_one_is_removed(self, db, make_product):
        make_product(1, stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=1)

        svc.decrement_product(user_id=1, product_id=1)

        assert lines_of(db, 1) == {}
        assert stock_of(db, 1) == 10

    def test_q_decrements_restore_q_units(self, db, make_product):
        make_product(1, stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=4)

        for _ in range(4):
            svc.decrement_product(user_id=1, product_id=1)

        assert lines_of(db, 1) == {}
        assert stock_of(db, 1) == 10

        with pytest.raises(NotFound):
            svc.decrement_product(user_id=1, product_id=1)
        assert stock_of(db, 1) == 10

    def test_missing_line(self, db, make_product):
        make_product(1, stock=10)
        make_product(2, stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=2, quantity=1)

        with pytest.raises(NotFound):
            svc.decrement_product(user_id=1, product_id=1)

        assert stock_of(db, 1) == 10


class TestGetCart:
    def test_totals_use_current_prices(self, db, make_product):
        make_product(1, price="10.00", stock=10)
        make_product(2, price="2.50", stock=10)
        svc = CartService(db)
        svc.add_product(user_id=1, product_id=1, quantity=2)
        svc.add_product(user_id=1, product_id=2, quantity=3)

        cart = svc.get_cart(user_id=1)

        assert cart["total"] == 27.5
        assert [i["line_total"] for i in cart["items"]] == [20, 7.5]

    def test_no_cart(self, db):
        with pytest.raises(NotFound):
            CartService(db).get_cart(user_id=1)


class TestConsistency:
    def test_stale_stock_read_is_rejected(self, db, session_factory, make_product):
        make_product(1, stock=1)
        svc = CartService(db)
        read_product = svc.products.get_product

        def racing_read(product_id):
            product = read_product(product_id)
            # drugi request kupuje ostatnia sztuke miedzy odczytem a zapisem
            other = session_factory()
            try:
                CartService(other).add_product(user_id=2, product_id=product_id, quantity=1)
            finally:
                other.close()
            return product

        svc.products.get_product = racing_read

        with pytest.raises(ConcurrencyConflict):
            svc.add_product(user_id=1, product_id=1, quantity=1)

        assert stock_of(db, 1) == 0
        assert lines_of(db, 1) is None
        assert lines_of(db, 2) == {1: 1}

    def test_failed_cart_write_leaves_stock_decremented(self, db, make_product):
        # znana luka: produkt zapisany, koszyk nie
        make_product(1, stock=5)
        svc = CartService(db)

        def broken_write(cart_id, product_id, quantity):
            raise OperationalError("INSERT INTO cart_items", {}, Exception("disk I/O error"))

        svc.repo.set_item_quantity = broken_write

        with pytest.raises(StoreUnavailable):
            svc.add_product(user_id=1, product_id=1, quantity=2)

        assert stock_of(db, 1) == 3
        assert lines_of(db, 1) is None
