"""View models handed to the templates."""

from urllib.parse import quote

from utils.records import BranchDetails, MenuItem

IMAGE_DIR = "/static/images/"
IMAGE_EXTENSION = ".jpg"


def branch_image_path(restaurant_name):
    """URI-encoded path of the restaurant's picture."""
    return quote(f"{IMAGE_DIR}{restaurant_name}{IMAGE_EXTENSION}", safe="/;,?:@&=+$-_.!~*'()#")


def build_branch_view(details, timeslots, menu_items):
    """Flatten branch details, available timeslots and menu into one dict."""
    details = BranchDetails.from_row(details)
    menu = [MenuItem.from_row(item) for item in menu_items]
    return {
        "image": branch_image_path(details.rname),
        "restaurant_name": details.rname,
        "branch_name": details.bname,
        "address": details.baddress,
        "phone": details.bphone,
        "timeslots": list(timeslots),
        "menu_items": [{"name": item.name, "price": item.price} for item in menu],
    }
