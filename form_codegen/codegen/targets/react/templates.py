"""
Jinja2 skeletons for the React target.

Only file layout lives here; field blocks, validation entries and
interface lines are produced by Python functions and passed in.
"""

COMPONENT_TEMPLATE = """{% for line in imports %}
{{ line }}
{% endfor %}

{% if typescript %}
export interface FormData {
{% for line in interface_lines %}
  {{ line }}
{% endfor %}
}

{% endif %}
{{ validation_block }}

const defaultValues{{ ": FormData" if typescript else "" }} = {
{% for line in default_lines %}
  {{ line }}
{% endfor %}
};

{% if typescript %}
interface {{ component_name }}Props {
  onSubmit: (values: FormData) => void | Promise<void>;
  initialValues?: Partial<FormData>;
}

export const {{ component_name }}: React.FC<{{ component_name }}Props> = ({ onSubmit, initialValues }) => {
{% else %}
export const {{ component_name }} = ({ onSubmit, initialValues }) => {
{% endif %}
{{ setup | indent(2) }}

  return (
    {{ form_open }}
{% for block in field_blocks %}
{{ block | indent(6) }}
{% endfor %}
{{ submit_button | indent(6) }}
    {{ form_close }}
  );
};

export default {{ component_name }};
"""

FORMIK_SETUP_TEMPLATE = """const formik = useFormik{{ "<FormData>" if typescript else "" }}({
  initialValues: { ...defaultValues, ...initialValues },
  {{ validation_option }}
  onSubmit: async (values) => {
    await onSubmit(values);
  },
});
"""

HOOK_FORM_SETUP_TEMPLATE = """const {
  register,
  handleSubmit,
{% if watches %}
  watch,
{% endif %}
  formState: { errors, isSubmitting },
} = useForm{{ "<FormData>" if typescript else "" }}({
  defaultValues: { ...defaultValues, ...initialValues },
  {{ resolver_option }}
});
"""

PLAIN_STATE_SETUP_TEMPLATE = """const [values, setValues] = useState{{ "<FormData>" if typescript else "" }}({ ...defaultValues, ...initialValues });
const [isSubmitting, setIsSubmitting] = useState(false);

{% if typescript %}
const handleChange = (
  event: React.ChangeEvent<HTMLInputElement | HTMLSelectElement | HTMLTextAreaElement>,
) => {
  const target = event.target as HTMLInputElement;
  let value: unknown;
{% else %}
const handleChange = (event) => {
  const target = event.target;
  let value;
{% endif %}
  if (target.type === 'checkbox') {
    value = target.checked;
  } else if (target.type === 'number') {
    value = target.value === '' ? '' : Number(target.value);
  } else if (target.type === 'file') {
    value = target.files?.[0] ?? null;
  } else if (event.target instanceof HTMLSelectElement && event.target.multiple) {
    value = Array.from(event.target.selectedOptions, (option) => option.value);
  } else {
    value = target.value;
  }
  setValues((current) => ({ ...current, [target.name]: value }));
};

const handleSubmit = async (event{{ ": React.FormEvent<HTMLFormElement>" if typescript else "" }}) => {
  event.preventDefault();
  if (!({{ validity_check }})) {
    return;
  }
  setIsSubmitting(true);
  try {
    await onSubmit(values);
  } finally {
    setIsSubmitting(false);
  }
};
"""

COMPONENT_TEST_TEMPLATE = """import React from 'react';
import { describe, expect, it, vi } from 'vitest';
import { render, screen } from '@testing-library/react';
import { {{ component_name }} } from '../{{ component_name }}';

describe('{{ component_name }}', () => {
  it('renders every always-visible field', () => {
    render(<{{ component_name }} onSubmit={vi.fn()} />);
{% for label in labels %}
    expect(screen.getAllByText({{ label }}, { exact: false }).length).toBeGreaterThan(0);
{% endfor %}
  });

  it('renders a submit button', () => {
    render(<{{ component_name }} onSubmit={vi.fn()} />);
    expect(screen.getByRole('button', { name: /submit/i })).toBeTruthy();
  });
});
"""

VITE_CONFIG_TEMPLATE = """{% if include_tests %}
/// <reference types="vitest" />
{% endif %}
import { defineConfig } from 'vite';
import react from '@vitejs/plugin-react';

export default defineConfig({
  plugins: [react()],
{% if include_tests %}
  test: {
    environment: 'jsdom',
  },
{% endif %}
});
"""


def get_react_templates():
    """Templates registered by the React emitter."""
    return {
        "component": COMPONENT_TEMPLATE,
        "formik_setup": FORMIK_SETUP_TEMPLATE,
        "hook_form_setup": HOOK_FORM_SETUP_TEMPLATE,
        "plain_state_setup": PLAIN_STATE_SETUP_TEMPLATE,
        "component_test": COMPONENT_TEST_TEMPLATE,
        "vite_config": VITE_CONFIG_TEMPLATE,
    }
