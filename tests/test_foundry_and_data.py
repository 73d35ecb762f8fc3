import pytest
from selenium.webdriver.common.by import By

from conftest import FakeDriver, FakeElement
from page_factory.controls import SelectList, TextField
from page_factory.data_factory import DataFactory, DataObject
from page_factory.errors import MissingDataError
from page_factory.foundry import Foundry
from page_factory.page_factory import PageFactory


class UserPage(PageFactory):
    @classmethod
    def declare(cls):
        cls.page_url("http://app.test/users/1/edit")
        cls.expected_title("Edit user")
        cls.element("name", lambda b: TextField(b.find_element(By.ID, "name")))
        cls.element("email", lambda b: TextField(b.find_element(By.ID, "email")))
        cls.button("Save")


class User(DataObject):
    defaults = {"name": "Ada", "email": "ada@example.test"}

    def create(self):
        self.created = True

    def edit(self, **opts):
        page = self.on(UserPage)
        page.name().fit(opts.get("name"))
        page.email().fit(opts.get("email"))
        page.save()
        self.update_options(opts)


@pytest.fixture
def user_driver():
    return FakeDriver(
        title="Edit user",
        elements={
            (By.ID, "name"): FakeElement("input", value="Ada"),
            (By.ID, "email"): FakeElement("input", value="ada@example.test"),
        },
    )


class Session(Foundry):
    def __init__(self, browser):
        self.browser = browser


def test_visit_navigates_and_remembers_the_page(user_driver):
    session = Session(user_driver)
    page = session.visit(UserPage)
    assert isinstance(page, UserPage)
    assert session.current_page is page
    assert user_driver.visited == ["http://app.test/users/1/edit"]


def test_on_does_not_navigate_and_runs_the_block(user_driver):
    seen = []
    page = Session(user_driver).on(UserPage, block=seen.append)
    assert seen == [page]
    assert user_driver.visited == []


def test_make_and_create(user_driver):
    session = Session(user_driver)
    made = session.make(User, name="Grace")
    assert made.name == "Grace"
    assert made.email == "ada@example.test"
    assert not hasattr(made, "created")
    assert session.create(User).created is True


def test_edit_only_touches_given_fields(user_driver, monkeypatch):
    save = FakeElement("button", text="Save")
    find = user_driver.find_element
    monkeypatch.setattr(user_driver, "find_element",
                        lambda by, value: save if by == By.XPATH else find(by, value))

    user = User(user_driver)
    user.edit(name=None, email="ada@new.test")

    name = user_driver.elements[(By.ID, "name")]
    email = user_driver.elements[(By.ID, "email")]
    assert name.calls == []
    assert email.value == "ada@new.test"
    assert save.calls == [("click",)]
    assert user.name == "Ada"
    assert user.email == "ada@new.test"


def test_set_options_skips_none():
    class Thing(DataFactory):
        colour = "red"

    thing = Thing()
    thing.set_options({"colour": None, "size": "L"})
    assert thing.colour == "red"
    assert thing.size == "L"
    thing.update_options(None)


def test_requires_names_missing_attributes():
    user = User(FakeDriver(), email=None)
    user.requires("name", "email")
    user.email = None
    user.nickname = None
    with pytest.raises(MissingDataError, match="email, nickname"):
        user.requires("name", "email", "nickname")


def test_base_data_object_has_no_create():
    with pytest.raises(NotImplementedError):
        DataObject(FakeDriver()).create()
