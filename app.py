from flask import (
    Flask, Blueprint, render_template, request, redirect,
    url_for, flash, session, abort, current_app, Response
)
from datetime import datetime, timedelta
from functools import partial, wraps
from zoneinfo import ZoneInfo

from admin_panel import EXPORT_FILENAME, AdminPanel, ProductForm
from catalog import (
    ALL_CATEGORIES, CATEGORY_LABELS, SIZE_OPTIONS, Category, InvalidProduct,
    ProductNotFound, SelectionIncomplete, category_badge, format_price,
    parse_category,
)
from storage import DatabaseStore, MappingStore, db
from storefront import CatalogStore
from whatsapp import SCHEDULE_SUMMARY, WHATSAPP_NUMBER

shop = Blueprint("shop", __name__)
admin = Blueprint("admin", __name__, url_prefix="/admin")

# ----------------------------
# CONFIG
# ----------------------------
DEFAULT_CONFIG = {
    "SECRET_KEY": "change-this-secret-key",
    "SQLALCHEMY_DATABASE_URI": "sqlite:///akron_store.db",
    "SQLALCHEMY_TRACK_MODIFICATIONS": False,
    # shared admin secret, compared as plain text
    "ADMIN_PASSWORD": "akron2024",
    "WHATSAPP_NUMBER": WHATSAPP_NUMBER,
    # IANA zone used for business hours, e.g. "America/Recife"; server time when unset
    "TIMEZONE": None,
    # the admin login lasts until logout
    "PERMANENT_SESSION_LIFETIME": timedelta(days=365),
}


def create_app(config=None):
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    # AKRON_SECRET_KEY, AKRON_ADMIN_PASSWORD, ... override the defaults
    app.config.from_prefixed_env("AKRON")
    if config:
        app.config.update(config)

    db.init_app(app)
    app.register_blueprint(shop)
    app.register_blueprint(admin)
    app.jinja_env.filters["price"] = format_price

    with app.app_context():
        db.create_all()

    return app


# ----------------------------
# STATE HELPERS
# ----------------------------
def shop_clock():
    tz_name = current_app.config.get("TIMEZONE")
    if not tz_name:
        return datetime.now
    return partial(datetime.now, ZoneInfo(tz_name))


def catalog_store():
    return CatalogStore(
        DatabaseStore(),
        clock=shop_clock(),
        whatsapp_number=current_app.config["WHATSAPP_NUMBER"],
    ).load()


def admin_panel():
    return AdminPanel(
        DatabaseStore(),
        auth_store=MappingStore(session),
        password=current_app.config["ADMIN_PASSWORD"],
    ).load()


# ----------------------------
# CONTEXT PROCESSOR
# ----------------------------
@shop.app_context_processor
def inject_shop_info():
    return dict(
        category_badge=category_badge,
        category_labels=CATEGORY_LABELS,
        schedule_summary=SCHEDULE_SUMMARY,
    )


# ----------------------------
# ADMIN DECORATOR
# ----------------------------
def admin_required(fn):
    """Hands the loaded AdminPanel to the view, or sends the visitor to login."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        panel = admin_panel()
        if not panel.is_authenticated:
            flash("Acesso restrito ao administrador.", "error")
            return redirect(url_for("admin.login"))
        return fn(panel, *args, **kwargs)
    return wrapper


# ----------------------------
# STOREFRONT
# ----------------------------
def get_product_or_404(store, product_id):
    product = store.get_product(product_id)
    if not product:
        abort(404)
    return product


def apply_selection(selection, values):
    """Copy color/size from a form or query string onto the selection."""
    try:
        if values.get("color") is not None:
            selection.choose_color(values.get("color"))
        if values.get("size") is not None:
            selection.choose_size(values.get("size"))
    except ValueError:
        abort(400)


@shop.route("/")
def home():
    store = catalog_store()
    store.category = parse_category(request.args.get("category"))
    store.search = request.args.get("q", "")
    return render_template(
        "index.html",
        store=store,
        categories=list(Category),
        all_categories=ALL_CATEGORIES,
    )


@shop.route("/product/<product_id>")
def product_detail(product_id):
    store = catalog_store()
    product = get_product_or_404(store, product_id)

    store.open_product(product)
    store.viewer.select(request.args.get("image", 0, type=int))
    store.viewer.set_zoom(request.args.get("zoom", 1.0, type=float))
    apply_selection(store.selection, request.args)

    return render_template("product_detail.html", store=store, product=product)


# GET starts a purchase, POST finalizes the color/size choice
@shop.route("/product/<product_id>/buy", methods=["GET", "POST"])
def buy_product(product_id):
    store = catalog_store()
    product = get_product_or_404(store, product_id)

    if request.method == "POST":
        store.open_product(product)
        apply_selection(store.selection, request.form)
        try:
            return redirect(store.finalize())
        except SelectionIncomplete as e:
            flash(str(e), "error")
            return redirect(url_for(
                "shop.product_detail",
                product_id=product.id,
                color=store.selection.color,
                size=store.selection.size,
            ))

    link = store.buy(product)
    if link:
        return redirect(link)

    return redirect(url_for(
        "shop.product_detail",
        product_id=product.id,
        color=store.selection.color,
        size=store.selection.size,
    ))


@shop.route("/whatsapp")
def whatsapp_contact():
    return redirect(catalog_store().general_link())


@shop.route("/contact", methods=["POST"])
def contact():
    store = catalog_store()
    store.contact_form.update(
        name=request.form.get("name", ""),
        email=request.form.get("email", ""),
        message=request.form.get("message", ""),
    )
    return redirect(store.submit_contact())


@shop.route("/newsletter", methods=["POST"])
def newsletter():
    store = catalog_store()
    store.newsletter_email = request.form.get("email", "")
    return redirect(store.submit_newsletter())


# ----------------------------
# ADMIN AUTH
# ----------------------------
@admin.route("/login", methods=["GET", "POST"])
def login():
    panel = admin_panel()
    if panel.is_authenticated:
        return redirect(url_for("admin.dashboard"))

    if request.method == "POST":
        if not panel.login(request.form.get("password", "")):
            flash("Senha incorreta!", "error")
            return render_template("admin_login.html"), 401

        session.permanent = True
        current_app.logger.info("Admin logged in")
        return redirect(url_for("admin.dashboard"))

    return render_template("admin_login.html")


@admin.route("/logout")
def logout():
    admin_panel().logout()
    flash("Sessão encerrada.", "info")
    return redirect(url_for("shop.home"))


# ----------------------------
# ADMIN PANEL
# ----------------------------
@admin.route("/")
@admin_required
def dashboard(panel):
    return render_template("admin_dashboard.html", panel=panel, stats=panel.stats())


def form_from_request():
    values = request.form
    category = parse_category(values.get("category"))
    return ProductForm(
        id=values.get("id") or None,
        name=values.get("name", ""),
        price=values.get("price", ""),
        original_price=values.get("original_price", ""),
        images=values.getlist("images"),
        category=category if category != ALL_CATEGORIES else Category.NEW,
        sizes=values.getlist("sizes"),
        colors=values.getlist("colors"),
        description=values.get("description", ""),
        featured="featured" in values,
    )


def slot_index(value):
    try:
        return int(value)
    except ValueError:
        abort(400)


def render_product_form(panel):
    return render_template(
        "admin_product_form.html",
        form=panel.form,
        categories=list(Category),
        size_options=SIZE_OPTIONS,
    )


@admin.route("/products/new")
@admin_required
def new_product(panel):
    panel.new_product()
    return render_product_form(panel)


@admin.route("/products/<product_id>/edit")
@admin_required
def edit_product(panel, product_id):
    try:
        panel.edit_product(product_id)
    except ProductNotFound as e:
        flash(str(e), "error")
        return redirect(url_for("admin.dashboard"))
    return render_product_form(panel)


# Every button of the product form posts here; "action" says which one.
@admin.route("/products/form", methods=["POST"])
@admin_required
def product_form(panel):
    panel.form = form_from_request()
    panel.form_open = True
    action = request.form.get("action", "save")

    name, _, arg = action.partition(":")

    if name == "add_image":
        panel.form.add_image()
    elif name == "remove_image":
        panel.form.remove_image(slot_index(arg))
    elif name == "add_color":
        panel.form.add_color()
    elif name == "remove_color":
        panel.form.remove_color(slot_index(arg))
    elif name == "toggle_size":
        panel.form.toggle_size(arg)
    elif name == "save":
        is_new = panel.form.is_new
        try:
            product = panel.save_product()
        except InvalidProduct as e:
            flash(str(e), "error")
            return render_product_form(panel), 400
        current_app.logger.info("Product %s %s", product.id, "created" if is_new else "updated")
        flash("Produto salvo.", "success")
        return redirect(url_for("admin.dashboard"))
    else:
        abort(400)

    return render_product_form(panel)


@admin.route("/products/<product_id>/delete", methods=["POST"])
@admin_required
def delete_product(panel, product_id):
    if not panel.delete_product(product_id, confirmed=request.form.get("confirm") == "yes"):
        flash("Nada foi removido.", "info")
        return redirect(url_for("admin.dashboard"))

    current_app.logger.info("Product %s deleted", product_id)
    flash("Produto removido.", "success")
    return redirect(url_for("admin.dashboard"))


@admin.route("/hero", methods=["POST"])
@admin_required
def save_hero(panel):
    panel.save_hero(
        title=request.form.get("title", ""),
        subtitle=request.form.get("subtitle", ""),
        image=request.form.get("image", ""),
        logo=request.form.get("logo", ""),
    )
    flash("Conteúdo principal salvo.", "success")
    return redirect(url_for("admin.dashboard"))


# ----------------------------
# SYSTEM ACTIONS
# ----------------------------
@admin.route("/export")
@admin_required
def export(panel):
    current_app.logger.info("Backup exported with %d products", len(panel.products))
    return Response(
        panel.export_json(),
        mimetype="application/json",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


@admin.route("/clear", methods=["POST"])
@admin_required
def clear_all(panel):
    if not panel.clear_all(confirmed=request.form.get("confirm") == "yes"):
        flash("Nada foi apagado.", "info")
        return redirect(url_for("admin.dashboard"))

    current_app.logger.warning("All shop data cleared")
    flash("Todos os dados foram apagados.", "success")
    return redirect(url_for("admin.dashboard"))


if __name__ == "__main__":
    create_app().run(debug=True)
