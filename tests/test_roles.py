"""Tests for role ordering and model classification."""

import pytest

from codeprobe_cli.roles import ArchRole, is_model_like, role_of, sort_by_role


@pytest.mark.parametrize(
    "path, role",
    [
        ("/p/web/OrderController.java", ArchRole.ENTRY),
        ("/p/api/OrderResource.java", ArchRole.ENTRY),
        ("/p/service/OrderService.java", ArchRole.SERVICE),
        ("/p/service/impl/OrderServiceImpl.java", ArchRole.IMPLEMENTATION),
        ("/p/mq/OrderConsumer.java", ArchRole.MESSAGING),
        ("/p/events/PaymentListener.java", ArchRole.MESSAGING),
        ("/p/mapper/OrderMapper.java", ArchRole.PERSISTENCE),
        ("/p/repo/OrderRepository.java", ArchRole.PERSISTENCE),
        ("/p/dto/OrderDTO.java", ArchRole.DATA_MODEL),
        ("/p/entity/Order.java", ArchRole.DATA_MODEL),
        ("/p/util/Strings.java", ArchRole.OTHER),
    ],
)
def test_role_of(path, role):
    assert role_of(path) == role


def test_sort_by_role_is_stable():
    paths = [
        "/p/util/B.java",
        "/p/dto/OrderDTO.java",
        "/p/service/impl/OrderServiceImpl.java",
        "/p/util/A.java",
        "/p/web/OrderController.java",
        "/p/service/OrderService.java",
    ]
    assert sort_by_role(paths) == [
        "/p/web/OrderController.java",
        "/p/service/OrderService.java",
        "/p/service/impl/OrderServiceImpl.java",
        "/p/dto/OrderDTO.java",
        "/p/util/B.java",
        "/p/util/A.java",
    ]


class TestIsModelLike:
    def test_by_directory(self):
        assert is_model_like("Order", "/p/domain/entity/Order.java")
        assert is_model_like("Status", "C:\\p\\enums\\Status.java")

    def test_by_suffix(self):
        assert is_model_like("OrderVO", "/p/web/OrderVO.java")
        assert is_model_like("CreateOrderRequest", "/p/web/CreateOrderRequest.java")

    def test_plain_class(self):
        assert not is_model_like("OrderService", "/p/service/OrderService.java")
