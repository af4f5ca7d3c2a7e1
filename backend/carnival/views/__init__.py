from carnival.views.admin_handlers import (
    admin_leaderboard_page as admin_leaderboard_page,
)
from carnival.views.admin_handlers import (
    admin_page as admin_page,
)
from carnival.views.admin_handlers import (
    assign_game as assign_game,
)
from carnival.views.admin_handlers import (
    award_points as award_points,
)
from carnival.views.admin_handlers import (
    update_points as update_points,
)
from carnival.views.api_handlers import api_guests as api_guests
from carnival.views.api_handlers import api_leaderboard as api_leaderboard
from carnival.views.api_handlers import health as health
from carnival.views.assets import create_templates as create_templates
from carnival.views.assets import render_page as render_page
from carnival.views.auth_handlers import login as login
from carnival.views.auth_handlers import login_page as login_page
from carnival.views.auth_handlers import logout as logout
from carnival.views.guest_handlers import home_page as home_page
from carnival.views.guest_handlers import leaderboard_page as leaderboard_page
from carnival.views.guest_handlers import register_guest as register_guest
from carnival.views.guest_handlers import welcome_page as welcome_page
