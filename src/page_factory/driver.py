from selenium import webdriver
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager
from selenium.webdriver.chrome.options import Options

from . import config
from .instrumentation import Cat, emit_signal


def create_driver(headless=None):
    """Chrome WebDriver for page classes; headless defaults to config.HEADLESS."""
    headless = config.HEADLESS if headless is None else headless
    options = Options()
    if headless:
        options.add_argument("--headless=new")
    options.add_argument("--start-maximized")
    driver = webdriver.Chrome(service=Service(ChromeDriverManager().install()),
                              options=options)
    # expected_element does its own polling; an implicit wait would stretch every poll
    driver.implicitly_wait(config.IMPLICIT_WAIT)
    emit_signal(Cat.STARTUP, "Driver started", browser="chrome", headless=headless,
                implicit_wait=config.IMPLICIT_WAIT)
    return driver
