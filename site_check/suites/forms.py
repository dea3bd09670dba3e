"""Contact form interaction checks."""

import re
import sys

from playwright.async_api import Browser, Page

from site_check import assertions
from site_check.browser import create_page, delay, navigate
from site_check.results import TestResults
from site_check.suites.base import BrowserSuite, run_standalone

FORM_SELECTOR = "#contact form, .contact-form"

FORM_SCRIPT = """(selector) => {
    const form = document.querySelector(selector);
    if (!form) return null;
    return {
        action: form.getAttribute('action'),
        method: form.method,
        inputs: Array.from(form.querySelectorAll('input, textarea, select')).map(el => ({
            type: el.type || el.tagName.toLowerCase(),
            name: el.name,
            id: el.id,
            required: el.required,
            maxLength: el.maxLength > 0 ? el.maxLength : null,
            minLength: el.minLength > 0 ? el.minLength : null,
            hasLabel: !!(el.id && document.querySelector(`label[for="${el.id}"]`))
                || !!el.closest('label') || !!el.getAttribute('aria-label'),
        })),
        hasSubmit: !!form.querySelector(
            'button[type="submit"], input[type="submit"], .form-submit'
        ),
    };
}"""

INVALID_REQUIRED_SCRIPT = """(selector) => {
    const form = document.querySelector(selector);
    form.reportValidity();
    return Array.from(form.querySelectorAll('input, textarea, select'))
        .filter(el => el.required && !el.validity.valid)
        .map(el => el.name);
}"""

FIELD_VALIDITY_SCRIPT = """(selector) => {
    const el = document.querySelector(selector);
    return el ? { value: el.value, valid: el.validity.valid } : null;
}"""

CHAR_COUNTER_SCRIPT = """() => ({
    hasTextarea: !!document.querySelector('#description'),
    count: document.querySelector('#char-count')?.textContent ?? null,
})"""

COUNTER_SAMPLE = "Testing character counter"


class FormSuite(BrowserSuite):
    """Contact form presence, validation and labelling."""

    title = "Form Interactions"

    async def run_checks(self, browser: Browser, results: TestResults) -> None:
        """Exercise the form on the main page, then the contact form page."""
        instrumented = await create_page(
            browser, self.config.default_viewport, timeouts=self.config.timeouts
        )
        page = instrumented.page
        await navigate(
            page, self.config.targets.main_site, timeouts=self.config.timeouts
        )
        await page.evaluate(
            "() => document.querySelector('#contact')?.scrollIntoView()"
        )
        await delay(self.config.timing.interaction_delay)

        await self._check_main_form(page, results)
        await self._check_contact_page(page, results)

    async def _check_main_form(self, page: Page, results: TestResults) -> None:
        rules = self.config.form_validation
        form = None
        with results.check("Form elements check"):
            form = await page.evaluate(FORM_SCRIPT, FORM_SELECTOR)
            assertions.is_true(form is not None, "Contact form not found")
            assertions.is_true(form["hasSubmit"], "Submit button missing")
            assertions.greater_than(len(form["inputs"]), 0, "Form has no inputs")
            results.add_pass("Form elements present", form)
        if form is None:
            return


        with results.check("Required fields declared"):
            required = {i["name"] for i in form["inputs"] if i["required"]}
            missing = [f for f in rules.required_fields if f not in required]
            assertions.is_false(
                missing, f"Fields not marked required: {', '.join(missing)}"
            )
            results.add_pass("Required fields declared", {"required": sorted(required)})

        with results.check("Required field validation"):
            invalid = await page.evaluate(INVALID_REQUIRED_SCRIPT, FORM_SELECTOR)
            assertions.is_true(
                invalid, "Form should have invalid required fields when empty"
            )
            results.add_pass("Required field validation working", {"invalid": invalid})

        email_selector = ", ".join(
            f'{scope} input[type="email"]' for scope in FORM_SELECTOR.split(", ")
        )
        with results.check("Email validation"):
            email = await page.query_selector(email_selector)
            if email is None:
                results.add_skip("Email validation", "No email input found")
            else:
                pattern = re.compile(rules.email_pattern)
                await email.fill("not-an-email")
                invalid_state = await page.evaluate(
                    FIELD_VALIDITY_SCRIPT, email_selector
                )
                assertions.is_false(
                    invalid_state["valid"], "Invalid email should fail validation"
                )
                await email.fill("test@example.com")
                valid_state = await page.evaluate(FIELD_VALIDITY_SCRIPT, email_selector)
                assertions.is_true(
                    valid_state["valid"], "Valid email should pass validation"
                )
                assertions.matches(valid_state["value"], pattern)
                results.add_pass(
                    "Email validation working",
                    {"invalid": invalid_state, "valid": valid_state},
                )

        with results.check("Description length limits"):
            description = next(
                (i for i in form["inputs"] if i["name"] == "description"), None
            )
            if description is None:
                results.add_skip("Description length limits", "No description field")
            elif description["maxLength"] is None:
                results.add_warn(
                    "Description length limits",
                    "Description field has no maxlength",
                    description,
                )
            else:
                assertions.less_than(
                    description["maxLength"],
                    rules.max_description_length + 1,
                    f"maxlength {description['maxLength']} exceeds "
                    f"{rules.max_description_length}",
                )
                results.add_pass("Description length limited", description)

        with results.check("Form field labels"):
            unlabelled = [
                i["name"] or i["id"]
                for i in form["inputs"]
                if not i["hasLabel"] and i["type"] not in ("hidden", "submit")
            ]
            assertions.is_false(
                unlabelled, f"Fields without labels: {', '.join(unlabelled)}"
            )
            results.add_pass("All form fields labelled")

        with results.check("Form action check"):
            action = form["action"] or ""
            if "YOUR_FORM_ID" in action:
                results.add_warn(
                    "Form action placeholder detected",
                    "Form action still contains the YOUR_FORM_ID placeholder",
                    {"action": action},
                )
            elif "formspree.io" in action:
                results.add_pass(
                    "Form action configured for Formspree", {"action": action}
                )
            else:
                results.add_warn(
                    "Form action may need configuration",
                    "Verify form submission endpoint is correct",
                    {"action": action},
                )

    async def _check_contact_page(self, page: Page, results: TestResults) -> None:
        loaded = False
        with results.check("Contact form page load"):
            await navigate(
                page, self.config.targets.contact_form, timeouts=self.config.timeouts
            )
            loaded = True
            results.add_pass("Contact form page loaded")
        if not loaded:
            return

        with results.check("Character counter"):
            counter = await page.evaluate(CHAR_COUNTER_SCRIPT)
            if not counter or not counter["hasTextarea"] or counter["count"] is None:
                results.add_skip("Character counter", "Counter elements not found")
            else:
                await page.locator("#description").press_sequentially(COUNTER_SAMPLE)
                counter = await page.evaluate(CHAR_COUNTER_SCRIPT)
                assertions.equals(
                    counter["count"].strip(),
                    str(len(COUNTER_SAMPLE)),
                    f"Counter should show {len(COUNTER_SAMPLE)}, "
                    f"got {counter['count']}",
                )
                results.add_pass(
                    "Character counter working",
                    {"typed": len(COUNTER_SAMPLE), "displayed": counter["count"]},
                )


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_standalone(FormSuite.execute, FormSuite.title))
