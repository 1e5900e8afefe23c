from flask import (
    Blueprint, abort, current_app, flash, redirect, render_template,
    request, session, url_for
)
from .api import EventAPIClient, EventAPIError
from .booking import BookingControl
from .dashboard import DashboardView, EDITABLE_FIELDS

# Create the blueprint
events_bp = Blueprint('events', __name__)

def image_src(image):
    """Absolute image URLs pass through, anything else is a bundled image."""
    if not image:
        return ''
    if image.startswith('http'):
        return image
    return url_for('static', filename=f'images/{image}')

def get_client() -> EventAPIClient:
    return current_app.extensions['event_api_client']

# Blank inputs for these mean "not set"
REQUIRED_FIELDS = ('title', 'price')

def apply_form(view):
    """Copy submitted form fields into the view's edit form."""
    for name in EDITABLE_FIELDS:
        if name not in request.form:
            continue
        value = request.form[name]
        if name not in REQUIRED_FIELDS and not value.strip():
            value = None
        view.update_field(name, value)

def build_dashboard():
    """Create a dashboard view for the current request.

    Returns the view and a dict that receives ``url`` if the view navigates.
    """
    navigation = {}
    view = DashboardView(
        client=get_client(),
        current_user=lambda: session.get('uid'),
        notify=lambda level, message: flash(message, level),
        navigate=lambda url: navigation.setdefault('url', url),
        login_url=current_app.config['LOGIN_URL']
    )
    return view, navigation

@events_bp.route('/dashboard')
def dashboard():
    """Render the signed-in user's events."""
    view, navigation = build_dashboard()
    if not view.mount():
        return redirect(navigation['url'])

    edit_id = request.args.get('edit')
    confirm_id = request.args.get('confirm_delete')
    if edit_id:
        view.open_edit(edit_id)
    elif confirm_id:
        view.request_delete(confirm_id)

    return render_template('dashboard.html', view=view, fields=EDITABLE_FIELDS)

@events_bp.route('/dashboard/events/new', methods=['GET', 'POST'])
def new_event():
    """Show and submit the form for a new event."""
    view, navigation = build_dashboard()
    if not view.mount():
        return redirect(navigation['url'])

    view.open_new()
    if request.method == 'POST':
        apply_form(view)
        if view.submit_edit():
            return redirect(url_for('events.dashboard'))

    return render_template('dashboard.html', view=view, fields=EDITABLE_FIELDS)

@events_bp.route('/dashboard/events/<event_id>', methods=['POST'])
def edit_event(event_id):
    """Submit the edit modal."""
    view, navigation = build_dashboard()
    if not view.mount():
        return redirect(navigation['url'])
    if not view.open_edit(event_id):
        return redirect(url_for('events.dashboard'))

    apply_form(view)

    if view.submit_edit():
        return redirect(url_for('events.dashboard'))

    # Keep the modal open with what the user typed
    return render_template('dashboard.html', view=view, fields=EDITABLE_FIELDS)

@events_bp.route('/dashboard/events/<event_id>/delete', methods=['POST'])
def delete_event(event_id):
    """Delete an event once the confirmation step was accepted."""
    view, navigation = build_dashboard()
    if not view.mount():
        return redirect(navigation['url'])

    view.request_delete(event_id)
    if request.form.get('confirm') == 'yes':
        view.confirm_delete()
    else:
        view.cancel_delete()
    return redirect(url_for('events.dashboard'))

def load_event(event_id):
    try:
        return get_client().get_event(event_id)
    except EventAPIError as e:
        if e.status_code == 404:
            abort(404)
        current_app.logger.error(f"Error fetching event {event_id} from API: {e}")
        abort(500)

@events_bp.route('/events/<event_id>')
def event_detail(event_id):
    """Render the public page for one event."""
    event = load_event(event_id)
    booking = BookingControl(event_id=event['id'], event_title=event['title'])
    return render_template('event_detail.html', event=event, booking=booking)

@events_bp.route('/events/<event_id>/book', methods=['POST'])
def book_event(event_id):
    """Show the booked state. Nothing is recorded."""
    event = load_event(event_id)
    booking = BookingControl(event_id=event['id'], event_title=event['title'])
    booking.book()
    return render_template('event_detail.html', event=event, booking=booking)
