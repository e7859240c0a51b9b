"""Head rendering configuration schema."""

from pydantic import BaseModel, ConfigDict, model_validator

from src.config.schemas.base import ProjectStage, SameSitePolicy


class HeadConfig(BaseModel):
    """Read-only configuration consulted while assembling the head.

    Attributes:
        theme: Theme name or expression; None selects the default theme.
        primeicons_enabled: Emit the icon font stylesheet.
        client_side_validation: Emit the client-side validation scripts.
        bean_validation: Also emit the Bean Validation script.
        client_side_localization: Emit the locale script for the current locale.
        cookies_secure: Mark client cookies secure when the request is secure.
        cookies_same_site: SameSite policy for client cookies, None to omit.
        validate_empty_fields: Validate fields that were submitted empty.
        interpret_empty_string_as_null: Treat submitted empty strings as null.
        early_post_param_evaluation: Evaluate post params when the request starts.
        partial_submit: Only submit the processed components in AJAX requests.
        move_scripts_to_bottom: Init scripts are placed after the body.
        html5_doctype: Document is HTML5, inline scripts need no type attribute.
        project_stage: Deployment stage.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    theme: str | None = None
    primeicons_enabled: bool = True
    client_side_validation: bool = False
    bean_validation: bool = False
    client_side_localization: bool = False
    cookies_secure: bool = True
    cookies_same_site: SameSitePolicy | None = SameSitePolicy.LAX
    validate_empty_fields: bool = False
    interpret_empty_string_as_null: bool = False
    early_post_param_evaluation: bool = False
    partial_submit: bool = False
    move_scripts_to_bottom: bool = False
    html5_doctype: bool = True
    project_stage: ProjectStage = ProjectStage.PRODUCTION

    @model_validator(mode="after")
    def _bean_validation_requires_client_side(self) -> "HeadConfig":
        if self.bean_validation and not self.client_side_validation:
            msg = "bean_validation requires client_side_validation"
            raise ValueError(msg)
        return self

    @property
    def is_development(self) -> bool:
        """Check if the application runs in the Development stage."""
        return self.project_stage == ProjectStage.DEVELOPMENT
