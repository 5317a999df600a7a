from flask import jsonify, request
from flask_login import login_required, current_user
from . import bp
from .forms import DomainForm, CategoryForm, CompetencyForm, LevelForm, StandardForm
from ...extensions import db
from ...models.competency import CompetencyDomain, CompetencyCategory, Competency, ProficiencyLevel
from ...models.standard import Standard
from ...utils.api import org_row_or_404, validate_or_400, commit_or_abort
from ...utils.decorators import staff_required


def _delete(row, failure):
    db.session.delete(row)
    commit_or_abort(failure=failure)
    return jsonify({"success": True})


# Domains

@bp.get("/domains")
@login_required
def list_domains():
    rows = CompetencyDomain.query.filter_by(org_id=current_user.org_id).order_by(CompetencyDomain.domain_name.asc()).all()
    return jsonify([r.to_dict() for r in rows])


@bp.post("/domains")
@staff_required
def create_domain():
    form = validate_or_400(DomainForm())
    row = CompetencyDomain(org_id=current_user.org_id, domain_name=form.domain_name.data)
    db.session.add(row)
    commit_or_abort(failure="Failed to create domain")
    return jsonify(row.to_dict()), 201


@bp.put("/domains/<int:domain_id>")
@staff_required
def update_domain(domain_id):
    row = org_row_or_404(CompetencyDomain, domain_id, "Domain not found")
    form = validate_or_400(DomainForm())
    row.domain_name = form.domain_name.data
    commit_or_abort(failure="Failed to update domain")
    return jsonify(row.to_dict())


@bp.delete("/domains/<int:domain_id>")
@staff_required
def delete_domain(domain_id):
    return _delete(org_row_or_404(CompetencyDomain, domain_id, "Domain not found"), "Failed to delete domain")


# Categories

@bp.get("/categories")
@login_required
def list_categories():
    rows = CompetencyCategory.query.filter_by(org_id=current_user.org_id).order_by(CompetencyCategory.name.asc()).all()
    return jsonify([r.to_dict() for r in rows])


@bp.post("/categories")
@staff_required
def create_category():
    form = validate_or_400(CategoryForm())
    domain = org_row_or_404(CompetencyDomain, form.domain_id.data, "Domain not found")
    row = CompetencyCategory(org_id=current_user.org_id, name=form.name.data, domain_id=domain.id)
    db.session.add(row)
    commit_or_abort(failure="Failed to create category")
    return jsonify(row.to_dict()), 201


@bp.put("/categories/<int:category_id>")
@staff_required
def update_category(category_id):
    row = org_row_or_404(CompetencyCategory, category_id, "Category not found")
    form = validate_or_400(CategoryForm())
    domain = org_row_or_404(CompetencyDomain, form.domain_id.data, "Domain not found")
    row.name = form.name.data
    row.domain_id = domain.id
    commit_or_abort(failure="Failed to update category")
    return jsonify(row.to_dict())


@bp.delete("/categories/<int:category_id>")
@staff_required
def delete_category(category_id):
    return _delete(org_row_or_404(CompetencyCategory, category_id, "Category not found"), "Failed to delete category")


# Competencies

@bp.get("")
@login_required
def list_competencies():
    rows = Competency.query.filter_by(org_id=current_user.org_id).order_by(Competency.name.asc()).all()
    return jsonify([r.to_dict() for r in rows])


@bp.post("")
@staff_required
def create_competency():
    form = validate_or_400(CompetencyForm())
    category = org_row_or_404(CompetencyCategory, form.category_id.data, "Category not found")
    row = Competency(org_id=current_user.org_id, name=form.name.data,
                     description=form.description.data or None, category_id=category.id)
    db.session.add(row)
    commit_or_abort(failure="Failed to create competency")
    return jsonify(row.to_dict()), 201


@bp.put("/<int:competency_id>")
@staff_required
def update_competency(competency_id):
    row = org_row_or_404(Competency, competency_id, "Competency not found")
    form = validate_or_400(CompetencyForm())
    category = org_row_or_404(CompetencyCategory, form.category_id.data, "Category not found")
    row.name = form.name.data
    row.description = form.description.data or None
    row.category_id = category.id
    commit_or_abort(failure="Failed to update competency")
    return jsonify(row.to_dict())


@bp.delete("/<int:competency_id>")
@staff_required
def delete_competency(competency_id):
    return _delete(org_row_or_404(Competency, competency_id, "Competency not found"), "Failed to delete competency")


# Proficiency levels

@bp.get("/levels")
@login_required
def list_levels():
    rows = ProficiencyLevel.query.filter_by(org_id=current_user.org_id).order_by(ProficiencyLevel.level_number.asc()).all()
    return jsonify([r.to_dict() for r in rows])


@bp.post("/levels")
@staff_required
def create_level():
    form = validate_or_400(LevelForm())
    row = ProficiencyLevel(org_id=current_user.org_id, level_number=form.level_number.data,
                           label=form.label.data, description=form.description.data or None)
    db.session.add(row)
    commit_or_abort(failure="Failed to create level")
    return jsonify(row.to_dict()), 201


@bp.put("/levels/<int:level_id>")
@staff_required
def update_level(level_id):
    row = org_row_or_404(ProficiencyLevel, level_id, "Level not found")
    form = validate_or_400(LevelForm())
    row.level_number = form.level_number.data
    row.label = form.label.data
    row.description = form.description.data or None
    commit_or_abort(failure="Failed to update level")
    return jsonify(row.to_dict())


@bp.delete("/levels/<int:level_id>")
@staff_required
def delete_level(level_id):
    return _delete(org_row_or_404(ProficiencyLevel, level_id, "Level not found"), "Failed to delete level")


# Standards

@bp.get("/standards")
@login_required
def list_standards():
    query = Standard.query.filter_by(org_id=current_user.org_id)
    domain_id = request.args.get("domain_id", type=int)
    if domain_id:
        query = query.filter_by(domain_id=domain_id)
    return jsonify([r.to_dict() for r in query.order_by(Standard.name.asc()).all()])


@bp.get("/standards/<int:standard_id>")
@login_required
def get_standard(standard_id):
    return jsonify(org_row_or_404(Standard, standard_id, "Standard not found").to_dict())


@bp.post("/standards")
@staff_required
def create_standard():
    form = validate_or_400(StandardForm())
    domain = org_row_or_404(CompetencyDomain, form.domain_id.data, "Domain not found")
    row = Standard(org_id=current_user.org_id, name=form.name.data, domain_id=domain.id,
                   definition=form.definition.data)
    db.session.add(row)
    commit_or_abort(failure="Failed to create standard")
    return jsonify(row.to_dict()), 201


@bp.put("/standards/<int:standard_id>")
@staff_required
def update_standard(standard_id):
    row = org_row_or_404(Standard, standard_id, "Standard not found")
    form = validate_or_400(StandardForm())
    domain = org_row_or_404(CompetencyDomain, form.domain_id.data, "Domain not found")
    row.name = form.name.data
    row.domain_id = domain.id
    row.definition = form.definition.data
    commit_or_abort(failure="Failed to update standard")
    return jsonify(row.to_dict())


@bp.delete("/standards/<int:standard_id>")
@staff_required
def delete_standard(standard_id):
    return _delete(org_row_or_404(Standard, standard_id, "Standard not found"), "Failed to delete standard")
