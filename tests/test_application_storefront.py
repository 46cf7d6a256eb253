"""
Tests for the storefront application layer (use cases).

Cart use cases run against the SQLite-backed store fixture; mail,
receipt rendering, and photo storage are mocked where the test is
about orchestration.
"""

import random
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, call

import pytest

from ninjacoders.application.storefront.add_to_cart import AddToCartUseCase
from ninjacoders.application.storefront.change_cart_item_qty import (
    ChangeCartItemQtyUseCase,
)
from ninjacoders.application.storefront.checkout import (
    RECEIPT_SUBJECT,
    CheckoutUseCase,
)
from ninjacoders.application.storefront.delete_from_cart import DeleteFromCartUseCase
from ninjacoders.application.storefront.dtos import (
    AddToCartCommand,
    ChangeCartItemQtyCommand,
    CheckoutCommand,
    DeleteFromCartCommand,
    NewsletterSignupCommand,
    StoreContestPhotoCommand,
)
from ninjacoders.application.storefront.get_cart import GetCartUseCase
from ninjacoders.application.storefront.list_products import ListProductsUseCase
from ninjacoders.application.storefront.newsletter_signup import (
    WELCOME_SUBJECT,
    NewsletterSignupUseCase,
)
from ninjacoders.application.storefront.store_contest_photo import (
    StoreContestPhotoUseCase,
)
from ninjacoders.domain.storefront.entities import Cart
from ninjacoders.domain.storefront.errors import (
    CartNotFoundError,
    InvalidEmailError,
    LineItemNotFoundError,
    MailDeliveryError,
    ProductNotFoundError,
    ReceiptRenderError,
    StorageIOError,
    ValidationError,
)
from ninjacoders.domain.storefront.ports import PhotoStorage
from ninjacoders.infrastructure.storefront.data_store_gateway import (
    SqlDataStoreGateway,
)
from ninjacoders.infrastructure.storefront.photo_storage import LocalPhotoStorage
from tests.conftest import APIS_ID, BOOTCAMP_ID, PYTHON_ID, RecordingMailGateway


def _add(store, cart_id, product_id) -> str:
    return AddToCartUseCase(store).execute(AddToCartCommand(cart_id, product_id))


def _renderer() -> MagicMock:
    renderer = MagicMock()
    renderer.render.return_value = "<p>receipt</p>"
    return renderer


class _CheckoutBeforeAddStore(SqlDataStoreGateway):
    """Checks the cart out from under the first add aimed at it."""

    def __init__(self, engine, racing_cart_id: str) -> None:
        super().__init__(engine)
        self._racing_cart_id = racing_cart_id

    def add_item(self, cart_id: str, product_id: str) -> bool:
        if cart_id == self._racing_cart_id:
            self._racing_cart_id = None
            self.checkout(cart_id, "other-tab@example.com")
        return super().add_item(cart_id, product_id)


class TestListProductsUseCase:
    """Tests for ListProductsUseCase."""

    def test_lists_catalogue_by_name(self, store) -> None:
        names = [p.name for p in ListProductsUseCase(store).execute()]
        assert names == ["Building Web APIs", "Ninja Bootcamp", "Python Fundamentals"]


class TestGetCartUseCase:
    """Tests for GetCartUseCase."""

    def test_absent_cart_id_yields_empty_cart(self, store) -> None:
        assert GetCartUseCase(store).execute(None) == Cart.empty()

    def test_unknown_cart_id_yields_empty_cart(self, store) -> None:
        cart = GetCartUseCase(store).execute("does-not-exist")
        assert cart.is_empty
        assert cart.total == Decimal("0")


class TestAddToCartUseCase:
    """Tests for AddToCartUseCase."""

    def test_creates_cart_lazily(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        cart = store.get_cart(cart_id)
        assert cart is not None
        assert [(i.product.id, i.qty) for i in cart.items] == [(PYTHON_ID, 1)]

    def test_reuses_session_cart(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        assert _add(store, cart_id, APIS_ID) == cart_id
        assert store.get_cart(cart_id).size == 2

    def test_same_product_twice_increments_quantity(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        _add(store, cart_id, PYTHON_ID)
        cart = store.get_cart(cart_id)
        assert cart.size == 1
        assert cart.items[0].qty == 2
        assert cart.total == Decimal("398.00")

    def test_unresolved_cart_id_is_replaced(self, store) -> None:
        cart_id = _add(store, "stale-id", PYTHON_ID)
        assert cart_id != "stale-id"
        assert store.get_cart(cart_id).size == 1

    def test_checked_out_cart_is_replaced(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        store.checkout(cart_id, "ninja@example.com")
        new_id = _add(store, cart_id, APIS_ID)
        assert new_id != cart_id
        assert [i.product.id for i in store.get_cart(new_id).items] == [APIS_ID]

    def test_checkout_racing_the_add_moves_item_to_new_cart(self, engine) -> None:
        cart_id = _add(SqlDataStoreGateway(engine), None, PYTHON_ID)
        store = _CheckoutBeforeAddStore(engine, racing_cart_id=cart_id)

        new_id = _add(store, cart_id, APIS_ID)

        assert new_id != cart_id
        assert [i.product.id for i in store.get_cart(new_id).items] == [APIS_ID]

    def test_unknown_product_raises(self, store) -> None:
        with pytest.raises(ProductNotFoundError):
            _add(store, None, "no-such-product")

    def test_items_keep_insertion_order(self, store) -> None:
        cart_id = _add(store, None, BOOTCAMP_ID)
        _add(store, cart_id, PYTHON_ID)
        _add(store, cart_id, BOOTCAMP_ID)
        _add(store, cart_id, APIS_ID)
        ids = [i.product.id for i in store.get_cart(cart_id).items]
        assert ids == [BOOTCAMP_ID, PYTHON_ID, APIS_ID]


class TestChangeCartItemQtyUseCase:
    """Tests for ChangeCartItemQtyUseCase."""

    def test_overwrites_quantity_and_total(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        cart = ChangeCartItemQtyUseCase(store).execute(
            ChangeCartItemQtyCommand(cart_id, PYTHON_ID, 5)
        )
        assert cart.items[0].qty == 5
        assert cart.items[0].subtotal == Decimal("995.00")
        assert cart.total == Decimal("995.00")

    def test_product_not_in_cart_leaves_cart_unchanged(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        before = store.get_cart(cart_id)
        with pytest.raises(LineItemNotFoundError):
            ChangeCartItemQtyUseCase(store).execute(
                ChangeCartItemQtyCommand(cart_id, APIS_ID, 3)
            )
        assert store.get_cart(cart_id) == before

    @pytest.mark.parametrize("qty", [0, -2])
    def test_quantity_below_one_deletes_line_item(self, store, qty: int) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        _add(store, cart_id, APIS_ID)
        cart = ChangeCartItemQtyUseCase(store).execute(
            ChangeCartItemQtyCommand(cart_id, PYTHON_ID, qty)
        )
        assert [i.product.id for i in cart.items] == [APIS_ID]

    def test_missing_cart_raises(self, store) -> None:
        with pytest.raises(CartNotFoundError):
            ChangeCartItemQtyUseCase(store).execute(
                ChangeCartItemQtyCommand(None, PYTHON_ID, 2)
            )


class TestDeleteFromCartUseCase:
    """Tests for DeleteFromCartUseCase."""

    def test_removes_line_item(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        DeleteFromCartUseCase(store).execute(DeleteFromCartCommand(cart_id, PYTHON_ID))
        cart = store.get_cart(cart_id)
        assert cart is not None
        assert cart.is_empty

    def test_missing_item_is_noop(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        DeleteFromCartUseCase(store).execute(DeleteFromCartCommand(cart_id, APIS_ID))
        assert store.get_cart(cart_id).size == 1

    def test_missing_cart_is_noop(self, store) -> None:
        DeleteFromCartUseCase(store).execute(DeleteFromCartCommand(None, PYTHON_ID))
        DeleteFromCartUseCase(store).execute(DeleteFromCartCommand("nope", PYTHON_ID))


class TestCartTotalsProperty:
    """Cart totals stay consistent under arbitrary edits."""

    def test_total_matches_subtotals_for_random_sequences(self, store) -> None:
        """Across random add/delete/change sequences the total is always the sum."""
        rng = random.Random(1234)
        products = [PYTHON_ID, BOOTCAMP_ID, APIS_ID]
        delete = DeleteFromCartUseCase(store)
        change = ChangeCartItemQtyUseCase(store)
        cart_id = None

        for _ in range(60):
            product_id = rng.choice(products)
            action = rng.choice(["add", "add", "delete", "change"])
            if action == "add":
                cart_id = _add(store, cart_id, product_id)
            elif action == "delete":
                delete.execute(DeleteFromCartCommand(cart_id, product_id))
            elif cart_id and store.get_cart(cart_id).find(product_id):
                change.execute(
                    ChangeCartItemQtyCommand(cart_id, product_id, rng.randint(-1, 4))
                )

            cart = GetCartUseCase(store).execute(cart_id)
            assert cart.total == sum((i.subtotal for i in cart.items), Decimal("0"))
            assert all(i.qty >= 1 for i in cart.items)
            assert len({i.product.id for i in cart.items}) == cart.size


class TestCheckoutUseCase:
    """Tests for CheckoutUseCase."""

    def test_finalizes_sends_receipt_and_snapshots(self, store, mailer) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        _add(store, cart_id, BOOTCAMP_ID)
        renderer = _renderer()

        result = CheckoutUseCase(store, mailer, renderer).execute(
            CheckoutCommand(cart_id, "ninja@example.com")
        )

        assert result.receipt_sent
        assert result.cart.id == cart_id
        assert result.cart.total == Decimal("1698.00")
        assert store.get_cart(cart_id) is None
        assert len(mailer.sent) == 1
        assert mailer.sent[0].to == "ninja@example.com"
        assert mailer.sent[0].subject == RECEIPT_SUBJECT
        assert mailer.sent[0].html
        renderer.render.assert_called_once_with(result.cart)

    def test_invalid_email_touches_nothing(self, store, mailer) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        with pytest.raises(InvalidEmailError):
            CheckoutUseCase(store, mailer, _renderer()).execute(
                CheckoutCommand(cart_id, "not-an-email")
            )
        assert store.get_cart(cart_id).size == 1
        assert mailer.sent == []

    def test_absent_cart_yields_empty_snapshot(self, store, mailer) -> None:
        result = CheckoutUseCase(store, mailer, _renderer()).execute(
            CheckoutCommand(None, "ninja@example.com")
        )
        assert result.cart.total == Decimal("0")
        assert result.cart.is_empty
        assert not result.receipt_sent
        assert mailer.sent == []

    def test_empty_active_cart_checks_out_with_zero_total(self, store, mailer) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        DeleteFromCartUseCase(store).execute(DeleteFromCartCommand(cart_id, PYTHON_ID))

        result = CheckoutUseCase(store, mailer, _renderer()).execute(
            CheckoutCommand(cart_id, "ninja@example.com")
        )

        assert result.cart.total == Decimal("0")
        assert store.get_cart(cart_id) is None

    def test_mail_failure_does_not_roll_back(self, store) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        failing = RecordingMailGateway()
        failing.fail = True

        result = CheckoutUseCase(store, failing, _renderer()).execute(
            CheckoutCommand(cart_id, "ninja@example.com")
        )

        assert not result.receipt_sent
        assert result.cart.size == 1
        assert store.get_cart(cart_id) is None

    def test_render_failure_is_reported_not_raised(self, store, mailer) -> None:
        cart_id = _add(store, None, PYTHON_ID)
        renderer = MagicMock()
        renderer.render.side_effect = ReceiptRenderError("broken template")

        result = CheckoutUseCase(store, mailer, renderer).execute(
            CheckoutCommand(cart_id, "ninja@example.com")
        )

        assert not result.receipt_sent
        assert mailer.sent == []

    def test_finalizes_before_sending(self) -> None:
        snapshot = Cart(id="c1", items=[])
        manager = MagicMock()
        manager.store.checkout.return_value = snapshot
        manager.renderer.render.return_value = "<p>receipt</p>"

        CheckoutUseCase(manager.store, manager.mailer, manager.renderer).execute(
            CheckoutCommand("c1", "ninja@example.com")
        )

        assert manager.mock_calls == [
            call.store.checkout("c1", "ninja@example.com"),
            call.renderer.render(snapshot),
            call.mailer.send("ninja@example.com", RECEIPT_SUBJECT, "<p>receipt</p>", html=True),
        ]


class TestNewsletterSignupUseCase:
    """Tests for NewsletterSignupUseCase."""

    def test_sends_welcome_email(self, mailer) -> None:
        NewsletterSignupUseCase(mailer).execute(
            NewsletterSignupCommand(name="Kim", email="kim@example.com")
        )
        assert len(mailer.sent) == 1
        assert mailer.sent[0].subject == WELCOME_SUBJECT
        assert mailer.sent[0].body.startswith("Hi Kim,")

    def test_invalid_email_sends_nothing(self, mailer) -> None:
        with pytest.raises(InvalidEmailError) as exc_info:
            NewsletterSignupUseCase(mailer).execute(
                NewsletterSignupCommand(name="Kim", email="not-an-email")
            )
        assert exc_info.value.message == "Email is invalid!"
        assert mailer.sent == []

    def test_mail_failure_propagates(self, mailer) -> None:
        mailer.fail = True
        with pytest.raises(MailDeliveryError) as exc_info:
            NewsletterSignupUseCase(mailer).execute(
                NewsletterSignupCommand(name="Kim", email="kim@example.com")
            )
        assert exc_info.value.message == "Failed to send email."


class TestStoreContestPhotoUseCase:
    """Tests for StoreContestPhotoUseCase."""

    def test_creates_partition_and_moves_file(self, tmp_path: Path) -> None:
        temp_file = tmp_path / "spooled.upload"
        temp_file.write_bytes(b"jpeg-bytes")
        root = tmp_path / "contest-uploads"

        result = StoreContestPhotoUseCase(LocalPhotoStorage(root)).execute(
            StoreContestPhotoCommand(2024, 3, temp_file, "desk.jpg")
        )

        assert result.path == root / "2024" / "3" / "desk.jpg"
        assert result.path.read_bytes() == b"jpeg-bytes"
        assert not temp_file.exists()

    def test_unusable_filename_rejected_before_any_io(self, tmp_path: Path) -> None:
        storage = MagicMock(spec=PhotoStorage)
        with pytest.raises(ValidationError):
            StoreContestPhotoUseCase(storage).execute(
                StoreContestPhotoCommand(2024, 3, tmp_path / "x", "..")
            )
        storage.ensure_partition.assert_not_called()

    def test_first_failure_short_circuits(self, tmp_path: Path) -> None:
        storage = MagicMock(spec=PhotoStorage)
        storage.ensure_partition.side_effect = StorageIOError("Permission denied")

        with pytest.raises(StorageIOError) as exc_info:
            StoreContestPhotoUseCase(storage).execute(
                StoreContestPhotoCommand(2024, 3, tmp_path / "x", "desk.jpg")
            )

        assert exc_info.value.message == "Permission denied"
        storage.move_into.assert_not_called()
        storage.discard.assert_not_called()

    def test_move_failure_skips_cleanup(self, tmp_path: Path) -> None:
        storage = MagicMock(spec=PhotoStorage)
        storage.move_into.side_effect = StorageIOError("No space left on device")

        with pytest.raises(StorageIOError):
            StoreContestPhotoUseCase(storage).execute(
                StoreContestPhotoCommand(2024, 3, tmp_path / "x", "desk.jpg")
            )

        storage.discard.assert_not_called()
