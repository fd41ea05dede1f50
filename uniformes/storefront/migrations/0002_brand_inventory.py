from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('storefront', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Brand',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='Nombre')),
                ('description', models.TextField(blank=True, verbose_name='Descripción')),
                ('logo', models.CharField(blank=True, max_length=500, verbose_name='Logo (URL)')),
                ('is_active', models.BooleanField(default=True, verbose_name='Activa')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Creada')),
            ],
            options={
                'verbose_name': 'Marca',
                'verbose_name_plural': 'Marcas',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Inventory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('size', models.CharField(max_length=20, verbose_name='Talla')),
                ('color', models.CharField(max_length=50, verbose_name='Color')),
                ('quantity', models.PositiveIntegerField(default=0, verbose_name='Existencia')),
                ('reserved_quantity', models.PositiveIntegerField(default=0, verbose_name='Apartado')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Actualizado')),
                ('product', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='inventory',
                    to='storefront.product',
                    verbose_name='Producto',
                )),
            ],
            options={
                'verbose_name': 'Inventario',
                'verbose_name_plural': 'Inventario',
                'ordering': ['product', 'size', 'color'],
                'constraints': [
                    models.UniqueConstraint(
                        fields=('product', 'size', 'color'),
                        name='uniq_inventory_product_size_color',
                    ),
                ],
            },
        ),
    ]
