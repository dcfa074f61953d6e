"""模型转换测试：验证按 index 稳定排序、空模型与未初始化区分、选项属性保留。"""

from __future__ import annotations

from calamari_spi.application.schema import build_model
from calamari_spi.domain.enums import FieldKind
from calamari_spi.domain.models import BooleanField, DecimalField, SelectField
from calamari_spi.infra.calamari.schemas import DescriptionResponse


def _description(model: dict | None) -> DescriptionResponse:
    payload: dict = {"description": "Calamari", "categories": ["ocr"], "steps": ["recognition"]}
    if model is not None:
        payload["model"] = model
    return DescriptionResponse.model_validate(payload)


def test_build_model_orders_entries_by_index() -> None:
    """integers 中 index 较小的条目应排在前面。"""
    description = _description(
        {
            "integers": [
                {"argument": "iters", "index": 2, "defaultValue": 100, "label": "Iterations"},
                {"argument": "n", "index": 1, "defaultValue": 1, "label": "N"},
            ]
        }
    )

    model = build_model(description)

    assert model is not None
    assert model.arguments() == ["n", "iters"]


def test_build_model_is_stable_for_equal_index_across_kinds() -> None:
    """index 相同的条目保持分组遍历顺序与组内顺序。"""
    description = _description(
        {
            "selects": [{"argument": "s", "index": 0, "items": []}],
            "strings": [{"argument": "str-a", "index": 0}, {"argument": "str-b", "index": 0}],
            "booleans": [{"argument": "b", "index": 0}],
            "decimals": [{"argument": "d", "index": -1}],
        }
    )

    model = build_model(description)

    assert model is not None
    assert model.arguments() == ["d", "b", "str-a", "str-b", "s"]
    assert len(model) == description.model.descriptor_count()


def test_build_model_without_description_is_unavailable() -> None:
    """未初始化或缺少字段模型时返回 None，而不是空模型。"""
    assert build_model(None) is None
    assert build_model(_description(None)) is None


def test_build_model_with_empty_schema_returns_empty_model() -> None:
    """零字段的字段模型返回空 Model，可与 None 区分。"""
    model = build_model(_description({"booleans": [], "integers": None}))

    assert model is not None
    assert len(model) == 0


def test_build_model_preserves_descriptor_attributes() -> None:
    """数值字段约束与选择字段选项标志应完整保留。"""
    description = _description(
        {
            "decimals": [
                {
                    "argument": "lr",
                    "index": 3,
                    "defaultValue": 0.001,
                    "label": "Learning rate",
                    "description": "Optimizer learning rate",
                    "placeholder": "0.001",
                    "step": 0.0001,
                    "minimum": 0,
                    "maximum": 1,
                    "disabled": True,
                }
            ],
            "selects": [
                {
                    "argument": "network",
                    "index": 1,
                    "label": "Network",
                    "multipleOptions": True,
                    "items": [
                        {"value": "def", "description": "Default", "selected": True},
                        {"value": "htr+", "description": "HTR+", "disabled": True},
                    ],
                }
            ],
        }
    )

    model = build_model(description)

    assert model is not None
    select, decimal = model.entries
    assert isinstance(select, SelectField)
    assert select.kind == FieldKind.select
    assert select.multiple_options is True
    assert [(item.value, item.selected, item.disabled) for item in select.options] == [
        ("def", True, False),
        ("htr+", False, True),
    ]
    assert select.options[1].description.resolve() == "HTR+"

    assert isinstance(decimal, DecimalField)
    assert decimal.default_value == 0.001
    assert (decimal.step, decimal.minimum, decimal.maximum) == (0.0001, 0, 1)
    assert decimal.disabled is True
    assert decimal.placeholder.resolve() == "0.001"
    assert decimal.unit is None


def test_build_model_binds_resolver_lazily() -> None:
    """文本在读取时才按 locale 解析。"""
    calls: list[tuple[str, str | None]] = []

    def resolver(text: str, locale: str | None) -> str:
        calls.append((text, locale))
        return f"[{locale}] {text}"

    model = build_model(
        _description({"booleans": [{"argument": "augment", "index": 0, "label": "Augment"}]}),
        resolver,
    )

    assert model is not None
    assert calls == []
    assert model.entries[0].label.resolve("de") == "[de] Augment"
    assert calls == [("Augment", "de")]
    # 空文本不经过解析函数。
    assert model.entries[0].description.resolve("de") is None


def test_boolean_default_value_accepts_null() -> None:
    """布尔字段的 defaultValue 与其他类型一致，可为 null 或缺省。"""
    model = build_model(
        _description(
            {
                "booleans": [
                    {"argument": "a", "index": 0, "defaultValue": None},
                    {"argument": "b", "index": 1},
                    {"argument": "c", "index": 2, "defaultValue": True},
                ]
            }
        )
    )

    assert model is not None
    assert all(isinstance(entry, BooleanField) for entry in model)
    assert [entry.default_value for entry in model] == [None, None, True]
