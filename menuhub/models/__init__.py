from menuhub.models.user import Role, User
from menuhub.models.restaurant import Restaurant
from menuhub.models.menu import Menu
from menuhub.models.menu_item import MenuItem
