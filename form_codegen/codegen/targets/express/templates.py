"""Jinja2 skeletons for the Express backend target."""

MODEL_TEMPLATE = """import { Column, CreateDateColumn, Entity, PrimaryGeneratedColumn, UpdateDateColumn } from 'typeorm';

@Entity('{{ table }}')
export class {{ entity }} {
  @PrimaryGeneratedColumn()
  id!: number;

{% for member in members %}
{{ member | indent(2) }}

{% endfor %}
  @CreateDateColumn({ name: 'created_at' })
  createdAt!: Date;

  @UpdateDateColumn({ name: 'updated_at' })
  updatedAt!: Date;

  @Column({ name: 'created_by', type: 'varchar', length: 255, nullable: true })
  createdBy?: string;

  @Column({ name: 'updated_by', type: 'varchar', length: 255, nullable: true })
  updatedBy?: string;
}
"""

REPOSITORY_TEMPLATE = """import { Repository } from 'typeorm';
import { AppDataSource } from '../data-source';
import { {{ entity }} } from '../models/{{ module }}.model';

export interface PaginatedResult<T> {
  data: T[];
  page: number;
  limit: number;
  total: number;
  totalPages: number;
}

export class {{ entity }}Repository {
  private repository: Repository<{{ entity }}>;

  constructor() {
    this.repository = AppDataSource.getRepository({{ entity }});
  }

  async create(data: Partial<{{ entity }}>): Promise<{{ entity }}> {
    const entity = this.repository.create(data);
    return this.repository.save(entity);
  }

  async findAll(page: number, limit: number): Promise<PaginatedResult<{{ entity }}>> {
    const [data, total] = await this.repository.findAndCount({
      skip: (page - 1) * limit,
      take: limit,
      order: { createdAt: 'DESC' },
    });
    return { data, page, limit, total, totalPages: Math.ceil(total / limit) };
  }

  async findById(id: number): Promise<{{ entity }} | null> {
    return this.repository.findOneBy({ id });
  }

  async update(id: number, data: Partial<{{ entity }}>): Promise<{{ entity }} | null> {
    const existing = await this.findById(id);
    if (!existing) {
      return null;
    }
    this.repository.merge(existing, data);
    return this.repository.save(existing);
  }

  async delete(id: number): Promise<boolean> {
    const result = await this.repository.delete(id);
    return (result.affected ?? 0) > 0;
  }
}
"""

CONTROLLER_TEMPLATE = """import { Request, Response } from 'express';
import { {{ entity }}Repository } from '../repositories/{{ module }}.repository';

const errorMessage = (error: unknown): string =>
  error instanceof Error ? error.message : String(error);

export class {{ entity }}Controller {
  private repository: {{ entity }}Repository;

  constructor() {
    this.repository = new {{ entity }}Repository();
  }

  create = async (req: Request, res: Response): Promise<void> => {
    try {
      const result = await this.repository.create(req.body);
      res.status(201).json({
        success: true,
        data: result,
        message: '{{ label }} created successfully',
      });
    } catch (error) {
      res.status(500).json({
        success: false,
        error: errorMessage(error),
        message: 'Failed to create {{ label }}',
      });
    }
  };

  getAll = async (req: Request, res: Response): Promise<void> => {
    try {
      const page = parseInt(req.query.page as string, 10) || 1;
      const limit = parseInt(req.query.limit as string, 10) || {{ page_size }};
      const result = await this.repository.findAll(page, limit);
      res.status(200).json({
        success: true,
        data: result.data,
        pagination: {
          page: result.page,
          limit: result.limit,
          total: result.total,
          totalPages: result.totalPages,
        },
      });
    } catch (error) {
      res.status(500).json({
        success: false,
        error: errorMessage(error),
        message: 'Failed to fetch {{ label }} records',
      });
    }
  };

{% for action in actions %}
  {{ action.name }} = async (req: Request, res: Response): Promise<void> => {
    try {
      const id = parseInt(req.params.id, 10);
      const result = await this.repository.{{ action.call }};
      if (!result) {
        res.status(404).json({
          success: false,
          message: '{{ label }} not found',
        });
        return;
      }
      res.status(200).json({
        success: true,
{% if action.returns_data %}
        data: result,
{% endif %}
{% if action.message %}
        message: '{{ label }} {{ action.message }}',
{% endif %}
      });
    } catch (error) {
      res.status(500).json({
        success: false,
        error: errorMessage(error),
        message: 'Failed to {{ action.verb }} {{ label }}',
      });
    }
  };
{% if not loop.last %}

{% endif %}
{% endfor %}
}
"""

ROUTES_TEMPLATE = """import { Router } from 'express';
import { {{ entity }}Controller } from '../controllers/{{ module }}.controller';
import { validate{{ entity }} } from '../validation/{{ module }}.validation';

const router = Router();
const controller = new {{ entity }}Controller();

// POST {{ base_path }}
router.post('/', validate{{ entity }}, controller.create);

// GET {{ base_path }}?page=1&limit={{ page_size }}
router.get('/', controller.getAll);

// GET {{ base_path }}/:id
router.get('/:id', controller.getById);

// PUT {{ base_path }}/:id
router.put('/:id', validate{{ entity }}, controller.update);

// DELETE {{ base_path }}/:id
router.delete('/:id', controller.delete);

export default router;
"""

VALIDATION_TEMPLATE = """import { NextFunction, Request, Response } from 'express';
import { body, validationResult } from 'express-validator';

export const validate{{ entity }} = [
{% for chain in chains %}
{{ chain | indent(2) }},
{% endfor %}
  (req: Request, res: Response, next: NextFunction) => {
    const errors = validationResult(req);
    if (!errors.isEmpty()) {
      res.status(400).json({
        success: false,
        errors: errors.array(),
        message: 'Validation failed',
      });
      return;
    }
    next();
  },
];
"""

DATA_SOURCE_TEMPLATE = """import 'reflect-metadata';
import { DataSource } from 'typeorm';
import { {{ entity }} } from './models/{{ module }}.model';

export const AppDataSource = new DataSource({
  type: 'postgres',
  url: process.env.DATABASE_URL,
  entities: [{{ entity }}],
  synchronize: false,
});
"""

INDEX_TEMPLATE = """import express from 'express';
import { AppDataSource } from './data-source';
import {{ module }}Routes from './routes/{{ module }}.routes';

const app = express();
app.use(express.json());
app.use('{{ base_path }}', {{ module }}Routes);

const port = Number(process.env.PORT) || 3000;

AppDataSource.initialize().then(() => {
  app.listen(port, () => {
    console.log(`API listening on port ${port}`);
  });
});
"""


def get_express_templates():
    return {
        "model": MODEL_TEMPLATE,
        "repository": REPOSITORY_TEMPLATE,
        "controller": CONTROLLER_TEMPLATE,
        "routes": ROUTES_TEMPLATE,
        "validation": VALIDATION_TEMPLATE,
        "data_source": DATA_SOURCE_TEMPLATE,
        "index": INDEX_TEMPLATE,
    }
