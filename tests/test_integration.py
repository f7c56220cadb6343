from fastapi import FastAPI
from pydantic import BaseModel, Field

from schema_rules.openapi import SchemaAnnotator, annotate_model, attach_validation_rules, schema_name
from schema_rules.validation import Validator, ValidatorRegistry


class Address(BaseModel):
    street: str
    zip_code: str


class CustomerCreate(BaseModel):
    name: str = Field(description="Display name")
    email: str | None = None
    age: int = 0
    address: Address | None = None


class Untracked(BaseModel):
    note: str


class AddressValidator(Validator):
    def __init__(self):
        super().__init__()
        self.rule_for("Zip_Code").exact_length(5)
        self.rule_for("zip_code").matches(r"^\d{5}$")


class CustomerCreateValidator(Validator):
    def __init__(self):
        super().__init__()
        self.rule_for("name").not_empty().max_length(80)
        self.rule_for("age").greater_than(17).less_than_or_equal(130)
        self.rule_for("email").email()


def _registry() -> ValidatorRegistry:
    registry = ValidatorRegistry()
    registry.register(CustomerCreate, CustomerCreateValidator)
    registry.register(Address, AddressValidator)
    return registry


def _app() -> FastAPI:
    app = FastAPI()

    @app.post("/customers")
    def create_customer(customer: CustomerCreate, untracked: Untracked) -> dict:
        return {}

    return app


def test_schema_name_uses_model_title():
    class Titled(BaseModel):
        model_config = {"title": "CustomerTitle"}

    assert schema_name(Titled) == "CustomerTitle"
    assert schema_name(CustomerCreate) == "CustomerCreate"


def test_annotate_model():
    out = annotate_model(CustomerCreate, SchemaAnnotator(_registry()))
    props = out["properties"]

    assert out["required"] == ["name"]
    assert props["name"]["minLength"] == 1
    assert props["name"]["maxLength"] == 80
    assert props["name"]["description"].startswith("Display name\n\n*Validation Rules*\n\n")
    assert props["age"]["exclusiveMinimum"] == 17
    assert props["age"]["maximum"] == 130
    assert "minimum" not in props["age"]
    assert "'Email' is not a valid email address." in props["email"]["description"]


def test_annotate_model_openapi_30_bounds():
    out = annotate_model(CustomerCreate, SchemaAnnotator(_registry()), numeric_exclusive_bounds=False)
    assert out["properties"]["age"]["minimum"] == 17
    assert out["properties"]["age"]["exclusiveMinimum"] is True


def test_fastapi_components_are_annotated():
    app = _app()
    attach_validation_rules(app, _registry())
    schemas = app.openapi()["components"]["schemas"]

    customer = schemas["CustomerCreate"]
    assert customer["required"] == ["name"]
    assert customer["properties"]["name"]["maxLength"] == 80
    assert customer["properties"]["age"]["exclusiveMinimum"] == 17

    zip_code = schemas["Address"]["properties"]["zip_code"]
    assert zip_code["minLength"] == zip_code["maxLength"] == 5
    assert zip_code["pattern"] == r"^\d{5}$"
    assert schemas["Address"]["required"] == ["street", "zip_code"]

    assert "description" not in schemas["Untracked"]["properties"]["note"]


def test_fastapi_document_is_annotated_once():
    app = _app()
    attach_validation_rules(app, _registry())
    first = app.openapi()
    second = app.openapi()

    assert first is second
    description = second["components"]["schemas"]["CustomerCreate"]["properties"]["name"]["description"]
    assert description.count("*Validation Rules*") == 1


def test_registered_model_without_component_is_skipped():
    class Orphan(BaseModel):
        value: int

    registry = _registry()
    registry.register(Orphan, Validator)
    app = _app()
    attach_validation_rules(app, registry)

    assert "Orphan" not in app.openapi()["components"]["schemas"]
